from enum import Enum

from pydantic import BaseModel


class Position(BaseModel):
    line: int
    column: int


class Location(BaseModel):
    start: Position
    end: Position


class NodeKind(str, Enum):
    ROOT = "root"
    ELEMENT = "element"
    INTERPOLATION = "interpolation"
    TEXT = "text"
    COMMENT = "comment"
    CONDITIONAL_GROUP = "conditional_group"
    CONDITIONAL_BRANCH = "conditional_branch"
    REPEAT = "repeat"
    COMPOUND_EXPRESSION = "compound_expression"
    TEXT_RUN = "text_run"


class SyntaxNode(BaseModel):
    """A template node tagged by ``kind``.

    Fields other than ``kind`` are capabilities that only some kinds carry:
    ``branches`` for conditional groups, ``condition`` for conditional
    branches and ``content`` for text-run wrappers.
    """

    kind: NodeKind
    location: Location | None = None
    children: list["SyntaxNode"] = []
    branches: list["SyntaxNode"] = []
    condition: Location | None = None
    content: "SyntaxNode | None" = None
    tag: str | None = None


SyntaxNode.model_rebuild()  # necessary for recursive types


class Diagnostic(BaseModel):
    file: str = ""
    line: int
    column: int
    code: str
    message: str = ""


class RegionKind(str, Enum):
    CODE = "code"
    MARKUP = "markup"


class CommentStyle(str, Enum):
    LINE = "line"
    HTML = "html"
    JSX = "jsx"


class Region(BaseModel):
    kind: RegionKind
    start: int
    end: int
    style: CommentStyle = CommentStyle.LINE


class EditKind(str, Enum):
    INSERT = "insert"
    DELETE = "delete"
    REPLACE_INLINE = "replace_inline"


class Edit(BaseModel):
    kind: EditKind
    line: int
    column: int | None = None
    text: str | None = None
    code: str | None = None


class FileReport(BaseModel):
    path: str
    inserted: int = 0
    removed: int = 0
    skipped: int = 0
    changed: bool = False
    error: str | None = None
    diff: str | None = None


class ParsedDocument(BaseModel):
    regions: list[Region] = []
    default_region: Region | None = None
    tree: SyntaxNode | None = None

"""Build regions and template trees from tree-sitter parses.

Positions are converted to 1-based lines and character columns of the whole
file. End positions point one past the node's last character.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import cast

from tree_sitter import Node
from tree_sitter_language_pack import SupportedLanguage, get_parser

from ts_expect_errors.core.languages import normalize_kind
from ts_expect_errors.core.ports.parser import DocumentParser
from ts_expect_errors.core.regions import lines_to_regions, whole_file_region
from ts_expect_errors.models import (
    CommentStyle,
    Location,
    NodeKind,
    ParsedDocument,
    Position,
    Region,
    RegionKind,
    SyntaxNode,
)

logger = logging.getLogger(__name__)

_TAG_NODES = {"start_tag", "end_tag", "self_closing_tag"}
_ELEMENT_NODES = {"element", "template_element"}
_CONDITIONAL_DIRECTIVES = {"v-if", "v-else-if", "v-else"}
_ATTRIBUTE_NODES = {"attribute", "directive_attribute"}


class _Positions:
    def __init__(self, source_bytes: bytes) -> None:
        self._lines = source_bytes.split(b"\n")

    def point(self, point: tuple[int, int]) -> Position:
        row, byte_column = point[0], point[1]
        line_bytes = self._lines[row] if row < len(self._lines) else b""
        column = len(line_bytes[:byte_column].decode("utf-8", errors="replace")) + 1
        return Position(line=row + 1, column=column)

    def location(self, node: Node) -> Location:
        return Location(start=self.point(node.start_point), end=self.point(node.end_point))


def _parse(source: str, language: str) -> tuple[Node, _Positions]:
    source_bytes = source.encode("utf-8")
    parser = get_parser(cast(SupportedLanguage, language))
    tree = parser.parse(source_bytes)
    return tree.root_node, _Positions(source_bytes)


def _walk(root: Node) -> Iterator[Node]:
    """Pre-order traversal; parents are yielded before their descendants."""
    stack = [root]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def _child_of_type(node: Node, node_type: str) -> Node | None:
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def _descendant_of_type(node: Node, node_type: str) -> Node | None:
    for candidate in _walk(node):
        if candidate is not node and candidate.type == node_type:
            return candidate
    return None


def _node_text(node: Node) -> str:
    return (node.text or b"").decode("utf-8", errors="replace")


def _line_count(source: str) -> int:
    return len(source.split("\n"))


# ---------------------------------------------------------------------------
# Vue single-file components
# ---------------------------------------------------------------------------


@dataclass
class _Directives:
    conditional: str | None = None
    condition: Location | None = None
    repeat: bool = False


def _attribute_name(attribute: Node) -> str:
    text = _node_text(attribute)
    return text.split("=", 1)[0].strip()


def _read_directives(tag: Node | None, positions: _Positions) -> _Directives:
    directives = _Directives()
    if tag is None:
        return directives
    for attribute in tag.named_children:
        if attribute.type not in _ATTRIBUTE_NODES:
            continue
        name = _attribute_name(attribute)
        if name in _CONDITIONAL_DIRECTIVES:
            directives.conditional = name
            value = _descendant_of_type(attribute, "attribute_value")
            if value is not None:
                directives.condition = positions.location(value)
        elif name == "v-for":
            directives.repeat = True
    return directives


def _convert(node: Node, positions: _Positions) -> tuple[SyntaxNode | None, _Directives]:
    location = positions.location(node)
    if node.type in _ELEMENT_NODES:
        tag = _child_of_type(node, "start_tag") or _child_of_type(node, "self_closing_tag")
        tag_name = _child_of_type(tag, "tag_name") if tag is not None else None
        element = SyntaxNode(
            kind=NodeKind.ELEMENT,
            location=location,
            children=_convert_children(node, positions),
            tag=_node_text(tag_name) if tag_name is not None else None,
        )
        return element, _read_directives(tag, positions)
    if node.type == "interpolation":
        return SyntaxNode(kind=NodeKind.INTERPOLATION, location=location), _Directives()
    if node.type == "text":
        if not _node_text(node).strip():
            return None, _Directives()
        return SyntaxNode(kind=NodeKind.TEXT, location=location), _Directives()
    if node.type == "comment":
        return SyntaxNode(kind=NodeKind.COMMENT, location=location), _Directives()
    logger.debug("Ignoring template node of type %s", node.type)
    return None, _Directives()


def _convert_children(parent: Node, positions: _Positions) -> list[SyntaxNode]:
    items: list[tuple[SyntaxNode, _Directives]] = []
    for child in parent.named_children:
        if child.type in _TAG_NODES:
            continue
        converted, directives = _convert(child, positions)
        if converted is not None:
            items.append((converted, directives))
    return _group_text_runs(_group_conditionals(items))


def _branch(node: SyntaxNode, directives: _Directives) -> SyntaxNode:
    return SyntaxNode(
        kind=NodeKind.CONDITIONAL_BRANCH,
        location=node.location,
        children=[node],
        condition=directives.condition,
    )


def _group_conditionals(items: list[tuple[SyntaxNode, _Directives]]) -> list[SyntaxNode]:
    """Fold v-if/v-else-if/v-else sibling chains and wrap v-for elements.

    A v-for element nested under a conditional is wrapped first, so the branch
    holds the repeat which holds the element.
    """
    result: list[SyntaxNode] = []
    group: SyntaxNode | None = None
    for node, directives in items:
        if node.kind is NodeKind.COMMENT:
            result.append(node)
            continue
        if node.kind is not NodeKind.ELEMENT or node.location is None:
            group = None
            result.append(node)
            continue

        wrapped = node
        if directives.repeat:
            wrapped = SyntaxNode(kind=NodeKind.REPEAT, location=node.location, children=[node])

        if directives.conditional == "v-if":
            group = SyntaxNode(
                kind=NodeKind.CONDITIONAL_GROUP,
                location=node.location,
                branches=[_branch(wrapped, directives)],
            )
            result.append(group)
        elif directives.conditional is not None and group is not None and group.location is not None:
            group.branches.append(_branch(wrapped, directives))
            group.location = Location(start=group.location.start, end=node.location.end)
        else:
            if directives.conditional is not None:
                logger.debug("%s without a preceding v-if at line %d", directives.conditional, node.location.start.line)
            group = None
            result.append(wrapped)
    return result


def _group_text_runs(nodes: list[SyntaxNode]) -> list[SyntaxNode]:
    """Wrap adjacent text and interpolation siblings in a compound expression."""
    result: list[SyntaxNode] = []
    run: list[SyntaxNode] = []

    def _flush() -> None:
        if len(run) > 1 and run[0].location is not None and run[-1].location is not None:
            location = Location(start=run[0].location.start, end=run[-1].location.end)
            result.append(SyntaxNode(kind=NodeKind.COMPOUND_EXPRESSION, location=location, children=list(run)))
        else:
            result.extend(run)
        run.clear()

    for node in nodes:
        if node.kind in (NodeKind.TEXT, NodeKind.INTERPOLATION):
            run.append(node)
            continue
        _flush()
        result.append(node)
    _flush()
    return result


def _element_region(node: Node, kind: RegionKind, style: CommentStyle) -> Region:
    return Region(kind=kind, start=node.start_point[0] + 1, end=node.end_point[0] + 1, style=style)


def parse_vue_document(source: str) -> ParsedDocument:
    """Regions and template tree of a Vue single-file component.

    Only the first top-level ``<template>`` is treated as markup; every
    top-level ``<script>`` becomes a code region.
    """
    root, positions = _parse(source, "vue")
    regions: list[Region] = []
    tree: SyntaxNode | None = None
    for child in root.named_children:
        if child.type == "template_element" and tree is None:
            regions.append(_element_region(child, RegionKind.MARKUP, CommentStyle.HTML))
            tree = SyntaxNode(
                kind=NodeKind.ROOT,
                location=positions.location(child),
                children=_convert_children(child, positions),
            )
        elif child.type == "script_element":
            regions.append(_element_region(child, RegionKind.CODE, CommentStyle.LINE))
    return ParsedDocument(regions=regions, default_region=None, tree=tree)


# ---------------------------------------------------------------------------
# TSX / JSX
# ---------------------------------------------------------------------------


def _interior_lines(node: Node) -> range:
    """1-based lines after the node's first line, through its last line."""
    return range(node.start_point[0] + 2, node.end_point[0] + 2)


def parse_tsx_document(source: str) -> ParsedDocument:
    """Code regions for a TSX file.

    Lines inside a JSX element's children take block-expression markers; lines
    inside opening tags or embedded ``{...}`` expressions stay plain code.
    Deeper constructs override the classification of their ancestors.
    """
    root, _ = _parse(source, "tsx")
    styles: dict[int, CommentStyle] = {}
    for node in _walk(root):
        if node.type == "jsx_element":
            open_tag = node.child_by_field_name("open_tag") or _child_of_type(node, "jsx_opening_element")
            close_tag = node.child_by_field_name("close_tag") or _child_of_type(node, "jsx_closing_element")
            if open_tag is None or close_tag is None:
                continue
            for line in range(open_tag.end_point[0] + 2, close_tag.start_point[0] + 2):
                styles[line] = CommentStyle.JSX
        elif node.type in ("jsx_opening_element", "jsx_self_closing_element", "jsx_expression"):
            for line in _interior_lines(node):
                styles[line] = CommentStyle.LINE

    jsx_lines = [line for line, style in styles.items() if style is CommentStyle.JSX]
    return ParsedDocument(
        regions=lines_to_regions(jsx_lines, RegionKind.CODE, CommentStyle.JSX),
        default_region=whole_file_region(_line_count(source)),
    )


def parse_plain_document(source: str) -> ParsedDocument:
    return ParsedDocument(default_region=whole_file_region(_line_count(source)))


_PARSERS: dict[str, DocumentParser] = {
    "typescript": parse_plain_document,
    "tsx": parse_tsx_document,
    "vue": parse_vue_document,
}


def parse_document(source: str, kind: str) -> ParsedDocument:
    return _PARSERS[normalize_kind(kind)](source)

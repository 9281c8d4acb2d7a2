from ts_expect_errors.config import Settings
from ts_expect_errors.core.ast import parse_document
from ts_expect_errors.core.markers import MarkerSyntax, marker_syntax
from ts_expect_errors.core.regions import SectionRouter
from ts_expect_errors.core.splicer import LineBuffer
from ts_expect_errors.models import CommentStyle, Edit, EditKind, RegionKind


def _strip_line(content: str, syntaxes: list[MarkerSyntax]) -> tuple[str | None, int]:
    """Return the line with markers removed (None to drop it) and the count removed."""
    removed = 0
    for syntax in syntaxes:
        if syntax.style is CommentStyle.LINE:
            # Line comments are only directives when they stand alone.
            if syntax.is_marker_line(content):
                return None, removed + 1
            continue
        content, count = syntax.strip(content)
        removed += count
    if removed and not content.strip():
        return None, removed
    return content, removed


def strip_markers(source: str, kind: str, settings: Settings) -> tuple[str, int]:
    """Remove every expect-error marker from a document.

    Returns the new text and the number of markers removed.
    """
    document = parse_document(source, kind)
    router = SectionRouter(document.regions, document.default_region)
    buffer = LineBuffer(source)

    code_syntaxes = [marker_syntax(CommentStyle.LINE, settings), marker_syntax(CommentStyle.JSX, settings)]
    markup_syntaxes = [marker_syntax(CommentStyle.HTML, settings)]

    edits: list[Edit] = []
    removed = 0
    for number, content in enumerate(buffer.lines, start=1):
        region = router.route(number)
        if region is None:
            continue
        syntaxes = markup_syntaxes if region.kind is RegionKind.MARKUP else code_syntaxes
        remaining, count = _strip_line(content, syntaxes)
        if not count:
            continue
        removed += count
        if remaining is None:
            edits.append(Edit(kind=EditKind.DELETE, line=number))
        else:
            edits.append(Edit(kind=EditKind.REPLACE_INLINE, line=number, text=remaining))

    buffer.apply(edits)
    return buffer.text(), removed

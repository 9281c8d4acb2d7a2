from collections.abc import Iterable

from ts_expect_errors.config import Settings
from ts_expect_errors.core.ast import parse_document
from ts_expect_errors.core.grouping import group_by_line
from ts_expect_errors.core.placement import PlacementContext, has_unused_directive, plan_line
from ts_expect_errors.core.regions import SectionRouter
from ts_expect_errors.core.splicer import LineBuffer
from ts_expect_errors.models import Diagnostic, Edit, EditKind, FileReport


def plan_edits(
    source: str,
    kind: str,
    diagnostics: Iterable[Diagnostic],
    settings: Settings,
) -> tuple[list[Edit], PlacementContext]:
    """Plan every edit for one document; returns the edits and the finished context.

    Lines that only lose markers are planned first, so insertions landing on
    them see the stripped text.
    """
    document = parse_document(source, kind)
    ctx = PlacementContext(
        settings=settings,
        router=SectionRouter(document.regions, document.default_region),
        tree=document.tree,
    )
    lines = LineBuffer(source).lines
    grouped = group_by_line(diagnostics)
    ordered = sorted(grouped, key=lambda item: not has_unused_directive(item[1], settings))

    edits: list[Edit] = []
    for line, line_diagnostics in ordered:
        edits.extend(plan_line(lines, line, line_diagnostics, ctx))
    return edits, ctx


def process_source(
    source: str,
    kind: str,
    diagnostics: Iterable[Diagnostic],
    settings: Settings,
    path: str = "",
) -> tuple[str, FileReport]:
    """Annotate one document's text; pure, no file access."""
    edits, ctx = plan_edits(source, kind, diagnostics, settings)
    buffer = LineBuffer(source)
    applied = buffer.apply(edits)
    text = buffer.text()

    report = FileReport(
        path=path,
        inserted=sum(1 for edit in applied if edit.kind is EditKind.INSERT),
        removed=ctx.removed,
        skipped=ctx.skipped,
        changed=text != source,
    )
    return text, report

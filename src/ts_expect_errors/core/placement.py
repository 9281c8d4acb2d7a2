"""Decide which edits one line's diagnostics turn into.

Edits are expressed in the coordinates of the text the diagnostics were
reported against; the splicer takes care of applying them in a safe order.
The one exception is an inline insertion on a line that also loses markers:
its column refers to the line after the markers are stripped.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ts_expect_errors.config import Settings
from ts_expect_errors.core.markers import MarkerSyntax, leading_whitespace, marker_syntax
from ts_expect_errors.core.regions import SectionRouter
from ts_expect_errors.core.resolver import resolve
from ts_expect_errors.models import Diagnostic, Edit, EditKind, RegionKind, SyntaxNode

logger = logging.getLogger(__name__)


@dataclass
class Rewrite:
    """A line losing its markers; ``text`` is None when the line is deleted."""

    text: str | None
    spans: list[tuple[int, int]]

    def shift(self, column: int) -> int:
        """Map a column of the original line onto the stripped text."""
        offset = column - 1
        removed = sum(min(end, offset) - start for start, end in self.spans if start < offset)
        return column - removed


@dataclass
class PlacementContext:
    """State for one file's pass; never shared between files."""

    settings: Settings
    router: SectionRouter
    tree: SyntaxNode | None = None
    used_positions: set[tuple[int, int]] = field(default_factory=set)
    rewrites: dict[int, Rewrite] = field(default_factory=dict)
    skipped: int = 0
    removed: int = 0


def has_unused_directive(diagnostics: Sequence[Diagnostic], settings: Settings) -> bool:
    return any(d.code == settings.unused_directive_code for d in diagnostics)


def plan_line(
    lines: Sequence[str],
    line: int,
    diagnostics: Sequence[Diagnostic],
    ctx: PlacementContext,
) -> list[Edit]:
    """Plan the edits for the diagnostics reported on ``line``.

    ``diagnostics`` must be in descending column order, as produced by
    ``group_by_line``. Lines carrying the unused-directive code should be
    planned before the rest of the file so insertions can see their rewrites.
    Planning the same diagnostics twice with one context yields no new edits.
    """
    if not diagnostics:
        return []
    if not 1 <= line <= len(lines):
        logger.warning("Diagnostic line %d is outside the file (%d lines)", line, len(lines))
        ctx.skipped += len(diagnostics)
        return []

    region = ctx.router.route(line)
    if region is None:
        logger.debug("Line %d is in no known region; skipping %d diagnostic(s)", line, len(diagnostics))
        ctx.skipped += len(diagnostics)
        return []

    syntax = marker_syntax(region.style, ctx.settings)
    if has_unused_directive(diagnostics, ctx.settings):
        return _plan_removal(lines, line, syntax, ctx)
    if region.kind is RegionKind.MARKUP:
        return _plan_markup(lines, diagnostics, syntax, ctx)
    return _plan_new_line(lines, line, diagnostics, syntax, ctx)


def _current_text(lines: Sequence[str], line: int, ctx: PlacementContext) -> str | None:
    rewrite = ctx.rewrites.get(line)
    if rewrite is not None:
        return rewrite.text
    return lines[line - 1]


def _plan_removal(lines: Sequence[str], line: int, syntax: MarkerSyntax, ctx: PlacementContext) -> list[Edit]:
    if line in ctx.rewrites:
        return []
    content = lines[line - 1]
    spans = syntax.spans(content)
    if not spans:
        logger.warning("No %s marker found on line %d; leaving it untouched", syntax.style.value, line)
        ctx.skipped += 1
        return []

    remaining, count = syntax.strip(content)
    ctx.removed += count
    if not remaining.strip():
        ctx.rewrites[line] = Rewrite(text=None, spans=spans)
        return [Edit(kind=EditKind.DELETE, line=line)]
    ctx.rewrites[line] = Rewrite(text=remaining, spans=spans)
    return [Edit(kind=EditKind.REPLACE_INLINE, line=line, text=remaining)]


def _plan_new_line(
    lines: Sequence[str],
    line: int,
    diagnostics: Sequence[Diagnostic],
    syntax: MarkerSyntax,
    ctx: PlacementContext,
) -> list[Edit]:
    # Column 0 never names a markup position, so whole-line insertions share the set.
    if (line, 0) in ctx.used_positions:
        return []
    ctx.used_positions.add((line, 0))

    target = lines[line - 1]
    above = _current_text(lines, line - 1, ctx) if line > 1 else None
    if syntax.is_marker_line(target) or (above is not None and syntax.is_marker_line(above)):
        logger.debug("Line %d is already marked", line)
        return []

    code = diagnostics[-1].code
    text = leading_whitespace(target) + syntax.render(code)
    return [Edit(kind=EditKind.INSERT, line=line, text=text, code=code)]


def _marker_nearby(content: str, column: int, syntax: MarkerSyntax) -> bool:
    return syntax.ends_with_marker(content[: column - 1]) or syntax.starts_with_marker(content[column - 1 :])


def _plan_markup(
    lines: Sequence[str],
    diagnostics: Sequence[Diagnostic],
    syntax: MarkerSyntax,
    ctx: PlacementContext,
) -> list[Edit]:
    if ctx.tree is None:
        ctx.skipped += len(diagnostics)
        return []

    # Later diagnostics have smaller columns and overwrite the code, so each
    # insertion point carries the leftmost diagnostic's code.
    targets: dict[tuple[int, int], str] = {}
    for diagnostic in diagnostics:
        node = resolve(
            ctx.tree,
            diagnostic.line,
            diagnostic.column,
            forward_attributes=ctx.settings.forward_attributes,
        )
        if node is None or node.location is None:
            logger.debug("No template node at %d:%d; skipping", diagnostic.line, diagnostic.column)
            ctx.skipped += 1
            continue
        start = node.location.start
        targets[(start.line, start.column)] = diagnostic.code

    edits: list[Edit] = []
    for (line, column), code in targets.items():
        if (line, column) in ctx.used_positions:
            continue
        ctx.used_positions.add((line, column))
        if not 1 <= line <= len(lines):
            logger.warning("Resolved line %d is outside the text; skipping", line)
            ctx.skipped += 1
            continue

        content = _current_text(lines, line, ctx)
        rewrite = ctx.rewrites.get(line)
        if rewrite is not None:
            column = rewrite.shift(column)
        if content is None or not 1 <= column <= len(content) + 1:
            logger.warning("Resolved position %d:%d is outside the text; skipping", line, column)
            ctx.skipped += 1
            continue
        if _marker_nearby(content, column, syntax):
            logger.debug("Marker already present at %d:%d", line, column)
            continue
        edits.append(Edit(kind=EditKind.INSERT, line=line, column=column, text=syntax.render(code), code=code))
    return edits

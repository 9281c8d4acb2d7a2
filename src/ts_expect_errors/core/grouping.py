from collections import defaultdict
from collections.abc import Iterable

from ts_expect_errors.models import Diagnostic


def group_by_line(diagnostics: Iterable[Diagnostic]) -> list[tuple[int, list[Diagnostic]]]:
    """Group diagnostics by line, bottom-to-top and right-to-left.

    Lines come out in descending order and each line's diagnostics in descending
    column order, so an edit applied for one entry can only move text that no
    later entry refers to.
    """
    by_line: dict[int, list[Diagnostic]] = defaultdict(list)
    for diagnostic in diagnostics:
        by_line[diagnostic.line].append(diagnostic)

    return [
        (line, sorted(by_line[line], key=lambda d: d.column, reverse=True))
        for line in sorted(by_line, reverse=True)
    ]

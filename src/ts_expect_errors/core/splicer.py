"""Offset-safe application of line edits.

All edit coordinates refer to the original text. ``LineBuffer.apply`` runs
them bottom-to-top and right-to-left, so every edit only shifts text that
has already been handled. A line rewrite runs before inline insertions on
the same line, whose columns refer to the rewritten text.
"""

import logging
from collections.abc import Iterable

from ts_expect_errors.models import Edit, EditKind

logger = logging.getLogger(__name__)


def _rank(edit: Edit) -> int:
    """Order on a shared line: rewrites, inline splices, deletions, new lines above."""
    if edit.kind is EditKind.REPLACE_INLINE:
        return 0
    if edit.kind is EditKind.INSERT:
        return 1 if edit.column is not None else 3
    return 2


def _sort_key(edit: Edit) -> tuple[int, int, int]:
    return (-edit.line, _rank(edit), -(edit.column or 0))


class LineBuffer:
    def __init__(self, text: str) -> None:
        self.newline = "\r\n" if "\r\n" in text else "\n"
        self.lines = text.split(self.newline)

    def __len__(self) -> int:
        return len(self.lines)

    def line(self, number: int) -> str:
        self._check_line(number)
        return self.lines[number - 1]

    def text(self) -> str:
        return self.newline.join(self.lines)

    def _check_line(self, number: int, allow_end: bool = False) -> None:
        upper = len(self.lines) + (1 if allow_end else 0)
        if not 1 <= number <= upper:
            raise IndexError(f"Line {number} out of range (1..{upper})")

    def delete_line(self, number: int) -> None:
        self._check_line(number)
        del self.lines[number - 1]

    def insert_line_before(self, number: int, text: str) -> None:
        self._check_line(number, allow_end=True)
        self.lines.insert(number - 1, text)

    def splice_inline(self, number: int, column: int, text: str) -> None:
        self._check_line(number)
        current = self.lines[number - 1]
        if not 1 <= column <= len(current) + 1:
            raise IndexError(f"Column {column} out of range on line {number} (1..{len(current) + 1})")
        self.lines[number - 1] = current[: column - 1] + text + current[column - 1 :]

    def replace_line(self, number: int, text: str) -> None:
        self._check_line(number)
        self.lines[number - 1] = text

    def apply(self, edits: Iterable[Edit]) -> list[Edit]:
        """Apply edits given in original coordinates; returns the edits applied.

        Repeated insertions at the same point are applied once.
        """
        seen: set[tuple[EditKind, int, int | None]] = set()
        unique: list[Edit] = []
        for edit in edits:
            key = (edit.kind, edit.line, edit.column)
            if key in seen:
                logger.debug("Dropping duplicate %s edit at %d:%s", edit.kind.value, edit.line, edit.column)
                continue
            seen.add(key)
            unique.append(edit)

        ordered = sorted(unique, key=_sort_key)
        for edit in ordered:
            if edit.kind is EditKind.DELETE:
                self.delete_line(edit.line)
            elif edit.kind is EditKind.REPLACE_INLINE:
                self.replace_line(edit.line, edit.text or "")
            elif edit.column is not None:
                self.splice_inline(edit.line, edit.column, edit.text or "")
            else:
                self.insert_line_before(edit.line, edit.text or "")
        return ordered

import re
from dataclasses import dataclass

from ts_expect_errors.config import Settings
from ts_expect_errors.models import CommentStyle

_CODE_TOKEN = r"(?:\s+TS\d+)?"


@dataclass(frozen=True)
class MarkerSyntax:
    style: CommentStyle
    directive: str
    pattern: re.Pattern[str]

    def render(self, code: str) -> str:
        if self.style is CommentStyle.HTML:
            return f"<!-- {self.directive} {code} -->"
        if self.style is CommentStyle.JSX:
            return f"{{/* {self.directive} {code} */}}"
        return f"// {self.directive} {code}"

    def is_marker_line(self, line: str) -> bool:
        """True if the line holds nothing but markers of this style."""
        if not self.pattern.search(line):
            return False
        return not self.pattern.sub("", line).strip()

    def strip(self, line: str) -> tuple[str, int]:
        """Remove every marker from ``line``; returns the rest and the count removed."""
        stripped, count = self.pattern.subn("", line)
        if count and self.style is CommentStyle.LINE:
            stripped = stripped.rstrip()
        return stripped, count

    def spans(self, line: str) -> list[tuple[int, int]]:
        """0-based ``(start, end)`` offsets of every marker on ``line``."""
        return [match.span() for match in self.pattern.finditer(line)]

    def ends_with_marker(self, text: str) -> bool:
        matches = list(self.pattern.finditer(text))
        return bool(matches) and not text[matches[-1].end() :].strip()

    def starts_with_marker(self, text: str) -> bool:
        return self.pattern.match(text.lstrip()) is not None


def marker_syntax(style: CommentStyle, settings: Settings) -> MarkerSyntax:
    if style is CommentStyle.HTML:
        directive = settings.vue_directive
        pattern = rf"<!--\s*{re.escape(directive)}{_CODE_TOKEN}\s*-->"
    elif style is CommentStyle.JSX:
        directive = settings.ts_directive
        pattern = rf"\{{/\*\s*{re.escape(directive)}{_CODE_TOKEN}\s*\*/\}}"
    else:
        directive = settings.ts_directive
        # A line comment runs to the end of the line, trailing message included.
        pattern = rf"//\s*{re.escape(directive)}(?![\w-]).*$"
    return MarkerSyntax(style=style, directive=directive, pattern=re.compile(pattern))


def leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]

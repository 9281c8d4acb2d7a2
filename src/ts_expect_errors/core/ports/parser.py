from typing import Protocol

from ts_expect_errors.models import ParsedDocument


class DocumentParser(Protocol):
    def __call__(self, source: str) -> ParsedDocument: ...

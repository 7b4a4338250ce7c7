"""Package-specific exception types."""

from __future__ import annotations

from .models import ErrorKind, SourceLocation


class ParseError(ValueError):
    """Base class for parsing-related errors.

    Represents errors encountered while parsing markdown content.
    """


class MarkdownError(ParseError):
    """Raised when an opening delimiter is never closed.

    Args:
        kind: Delimiter family that was left open.
        offset: Code-point offset of the opening delimiter.
    """

    def __init__(self, kind: ErrorKind, offset: int):
        self.kind = kind
        self.offset = offset
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"Unclosed '{self.kind.delimiter}' opened at offset {self.offset}"

    def location(self, document: str) -> SourceLocation:
        """Map the error offset to a line and column within `document`."""
        return SourceLocation.from_offset(document, self.offset)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MarkdownError):
            return NotImplemented
        return (self.kind, self.offset) == (other.kind, other.offset)

    def __hash__(self) -> int:
        return hash((self.kind, self.offset))


class ParseFileError(Exception):
    """Raised when parsing a Markdown file fails."""

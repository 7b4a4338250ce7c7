"""Data models for inline-markdown."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union


class TokenKind(Enum):
    """Lexical token kinds produced while scanning a document.

    Attributes:
        TEXT: A run of characters containing no delimiter.
        ESCAPE: A backslash (``\\``).
        STAR: A single ``*``.
        DOUBLE_STAR: Reserved; never emitted by the lexer.
        UNDERSCORE: A single ``_``.
        DOUBLE_UNDERSCORE: Reserved; never emitted by the lexer.
        BACKTICK: A single backtick.
        BACKTICKS: A fence of three backticks.
        SQUARE_BRACKET_OPEN: ``[``.
        SQUARE_BRACKET_CLOSE: ``]``.
        PAREN_OPEN: ``(``.
        PAREN_CLOSE: ``)``.
        TILDE: Reserved; never emitted by the lexer.
        DOUBLE_PIPE: Reserved; never emitted by the lexer.
        EXCLAMATION_MARK: Reserved; never emitted by the lexer.
        GREATER_THAN: Reserved; never emitted by the lexer.
    """

    TEXT = auto()
    ESCAPE = auto()
    STAR = auto()
    DOUBLE_STAR = auto()
    UNDERSCORE = auto()
    DOUBLE_UNDERSCORE = auto()
    BACKTICK = auto()
    BACKTICKS = auto()
    SQUARE_BRACKET_OPEN = auto()
    SQUARE_BRACKET_CLOSE = auto()
    PAREN_OPEN = auto()
    PAREN_CLOSE = auto()
    TILDE = auto()
    DOUBLE_PIPE = auto()
    EXCLAMATION_MARK = auto()
    GREATER_THAN = auto()


@dataclass(frozen=True)
class Token:
    """A classified, positioned slice of the source document.

    Attributes:
        kind: Lexical kind of the token.
        text: Exact source text covered by the token.
        offset: Code-point index of the token's first character.
    """

    kind: TokenKind
    text: str
    offset: int


class ErrorKind(Enum):
    """Opening delimiters that can be left unclosed.

    Each value is the delimiter text as it appears in the source.
    """

    STAR_OPEN = "*"
    UNDERSCORE_OPEN = "_"
    BACKTICK_OPEN = "`"
    BACKTICKS_OPEN = "```"
    SQUARE_BRACKETS_OPEN = "["
    PARENTHESES_OPEN = "("

    @property
    def delimiter(self) -> str:
        return self.value


# Markdown values. Each variant is a standalone frozen dataclass; the closed
# set is the ``Markdown`` union below.


@dataclass(frozen=True)
class Document:
    """Root marker of a parsed document."""


@dataclass(frozen=True)
class Text:
    """Literal text, e.g. ``plain words``."""

    text: str


@dataclass(frozen=True)
class Bold:
    """Bold text, e.g. ``*bold*``."""

    text: str


@dataclass(frozen=True)
class Italic:
    """Italic text, e.g. ``_italic_``."""

    text: str


@dataclass(frozen=True)
class FixedWidthCode:
    """Inline code between single backticks."""

    text: str


@dataclass(frozen=True)
class PreFormattedFixedWidthCode:
    """Fenced code.

    Attributes:
        lang: Language tag from the fence's first line, or None.
        code: Code body.
    """

    lang: str | None
    code: str


@dataclass(frozen=True)
class InlineURL:
    """Inline link, e.g. ``[title](https://example.com)``."""

    title: str
    url: str


Markdown = Union[
    Document,
    Text,
    Bold,
    Italic,
    FixedWidthCode,
    PreFormattedFixedWidthCode,
    InlineURL,
]


@dataclass
class Node:
    """A node of the Markdown AST.

    Attributes:
        value: Markdown value held by the node.
        children: Child nodes in document order.

    Examples:
        root = Node(Document())
        root.add_child(Node(Bold("bold text")))
    """

    value: Markdown
    children: list[Node] = field(default_factory=list)

    def add_child(self, node: Node) -> None:
        self.children.append(node)


@dataclass(frozen=True)
class SourceLocation:
    """Line and column of a code-point offset within a document.

    Attributes:
        line: One-based line number.
        column: One-based column, counted in code points.
        offset: Zero-based code-point offset the location was derived from.
    """

    line: int
    column: int
    offset: int

    @classmethod
    def from_offset(cls, document: str, offset: int) -> SourceLocation:
        """Compute the location of `offset` within `document`.

        Offsets past the end of the document are clamped to its length.

        Examples:
            SourceLocation.from_offset("ab\\ncd", 4)  # line 2, column 2
        """
        offset = max(0, min(offset, len(document)))
        line = document.count("\n", 0, offset) + 1
        line_start = document.rfind("\n", 0, offset) + 1
        return cls(line=line, column=offset - line_start + 1, offset=offset)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"

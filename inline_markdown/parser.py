"""Markdown parsing utilities."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from .config import CliConfig, ConfigError, validate_config
from .exceptions import MarkdownError, ParseFileError
from .lexer import lex
from .models import (
    Bold,
    Document,
    ErrorKind,
    FixedWidthCode,
    InlineURL,
    Italic,
    Node,
    PreFormattedFixedWidthCode,
    Text,
    Token,
    TokenKind,
)
from .reader import TokenReader

logger = logging.getLogger(__name__)

# Tokens a preceding backslash can turn into literal text
ESCAPABLE_KINDS = frozenset(
    {
        TokenKind.STAR,
        TokenKind.UNDERSCORE,
        TokenKind.BACKTICK,
        TokenKind.BACKTICKS,
        TokenKind.SQUARE_BRACKET_OPEN,
    }
)


def parse(document: str) -> Node:
    """Parse inline Markdown into an AST rooted at a `Document` node.

    Args:
        document: The markdown content to parse.

    Returns:
        Node: Root node whose children are the inline elements in order.

    Raises:
        MarkdownError: If an opening delimiter is never closed. The offset is
            that of the opening delimiter.

    Examples:
        parse("*bold*")  # Node(Document(), [Node(Bold("bold"))])
        parse("*bold")  # raises MarkdownError(ErrorKind.STAR_OPEN, 0)
    """
    return parse_tokens(lex(document))


def parse_tokens(tokens: Sequence[Token]) -> Node:
    """Parse a token sequence produced by `lex`.

    Args:
        tokens: Tokens in source order.

    Returns:
        Node: Root `Document` node.

    Raises:
        MarkdownError: If an opening delimiter is never closed.
    """
    reader: TokenReader[Token] = TokenReader(tokens)
    root = Node(Document())
    escape_count = 0

    while True:
        token = reader.next()
        if token is None:
            break

        if token.kind is TokenKind.ESCAPE:
            escape_count += 1
            if _try_escape_next(reader, root, escape_count):
                escape_count = 0
            continue

        root.add_child(_parse_token(reader, token))
        escape_count = 0

    logger.debug("Parsed %d tokens into %d nodes", len(tokens), len(root.children))
    return root


def _try_escape_next(reader: TokenReader[Token], root: Node, escape_count: int) -> bool:
    """Resolve the token after an escape according to the escape parity.

    An odd count turns an escapable token into literal text. An even count,
    or a token that cannot be escaped, is pushed back for normal processing.
    Nothing is emitted when the escape is the last token.

    Args:
        reader: Token reader positioned just after the escape.
        root: Node receiving the literal text.
        escape_count: Consecutive escapes seen so far, including this one.

    Returns:
        bool: True when the following token was emitted as literal text.
    """
    following = reader.next()
    if following is None:
        return False

    if following.kind in ESCAPABLE_KINDS and escape_count % 2 == 1:
        root.add_child(Node(Text(following.text)))
        return True

    # Pushed back rather than dropped so a following escape still counts
    reader.go_back()
    return False


def _parse_token(reader: TokenReader[Token], token: Token) -> Node:
    kind = token.kind
    if kind is TokenKind.STAR:
        text = _parse_until(reader, TokenKind.STAR, token.offset, ErrorKind.STAR_OPEN)
        return Node(Bold(text))
    if kind is TokenKind.UNDERSCORE:
        text = _parse_until(reader, TokenKind.UNDERSCORE, token.offset, ErrorKind.UNDERSCORE_OPEN)
        return Node(Italic(text))
    if kind is TokenKind.BACKTICK:
        text = _parse_until(reader, TokenKind.BACKTICK, token.offset, ErrorKind.BACKTICK_OPEN)
        return Node(FixedWidthCode(text))
    if kind is TokenKind.BACKTICKS:
        text = _parse_until(reader, TokenKind.BACKTICKS, token.offset, ErrorKind.BACKTICKS_OPEN)
        return Node(split_fenced_code(text))
    if kind is TokenKind.SQUARE_BRACKET_OPEN:
        return _parse_link(reader, token)
    if kind is TokenKind.PAREN_OPEN:
        text = _parse_until(reader, TokenKind.PAREN_CLOSE, token.offset, ErrorKind.PARENTHESES_OPEN)
        # Parentheses outside a link are literal
        return Node(Text(f"({text})"))

    # Plain text and stray closing delimiters
    return Node(Text(token.text))


def _parse_link(reader: TokenReader[Token], opener: Token) -> Node:
    """Parse ``[title](url)``, or fall back to the bare title as text.

    An unclosed URL is reported at the offset of the ``[`` that opened the
    link.
    """
    title = _parse_until(
        reader, TokenKind.SQUARE_BRACKET_CLOSE, opener.offset, ErrorKind.SQUARE_BRACKETS_OPEN
    )

    following = reader.next()
    if following is None:
        return Node(Text(title))

    if following.kind is not TokenKind.PAREN_OPEN:
        reader.go_back()
        return Node(Text(title))

    url = _parse_until(reader, TokenKind.PAREN_CLOSE, opener.offset, ErrorKind.PARENTHESES_OPEN)
    return Node(InlineURL(title=title, url=url))


def _parse_until(
    reader: TokenReader[Token], closing: TokenKind, start: int, error_kind: ErrorKind
) -> str:
    """Collect token text up to the next unescaped `closing` token.

    Escape tokens are dropped from the collected text and flip the local
    parity; a closing token preceded by an odd number of escapes is kept as
    text. On success, the reader is positioned just past the closing token.

    Args:
        reader: Token reader positioned just after the opening delimiter.
        closing: Token kind that ends the span.
        start: Offset of the opening delimiter, used for errors.
        error_kind: Error reported when the span is never closed.

    Returns:
        str: Concatenated text of the tokens between the delimiters.

    Raises:
        MarkdownError: If the tokens run out before a closing token.
    """
    parts: list[str] = []
    escape_count = 0

    while True:
        token = reader.next()
        if token is None:
            break

        if token.kind is TokenKind.ESCAPE:
            escape_count += 1
            continue
        if token.kind is closing and escape_count % 2 == 0:
            return "".join(parts)
        parts.append(token.text)
        escape_count = 0

    logger.debug("Unclosed %r opened at offset %d", error_kind.delimiter, start)
    raise MarkdownError(error_kind, start)


def split_fenced_code(text: str) -> PreFormattedFixedWidthCode:
    """Split the body of a fence into its language tag and code.

    With a line break, the first line is the language, kept verbatim (None
    when empty), and the remainder, minus one trailing line break, is the
    code. Without one, the whole text is code.

    Examples:
        split_fenced_code("rust\\ncode\\n")  # lang="rust", code="code"
        split_fenced_code("code")  # lang=None, code="code"
    """
    if "\n" not in text:
        return PreFormattedFixedWidthCode(lang=None, code=text)

    first_line, _, code = text.partition("\n")
    lang = first_line or None
    if code.endswith("\n"):
        code = code[:-1]
    return PreFormattedFixedWidthCode(lang=lang, code=code)


def read_document(filepath: Path, config: CliConfig | None = None) -> str:
    """Read a Markdown file, enforcing the configured size limits.

    Args:
        filepath: Path to the markdown file to read.
        config: Configuration providing size limits; defaults to a new
            `CliConfig` when omitted.

    Returns:
        str: File content.

    Raises:
        ParseFileError: If configuration is invalid, or the file is too large
            or cannot be read or decoded.
    """
    config = config or CliConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ParseFileError(str(error)) from error

    try:
        file_size = filepath.stat().st_size
        if file_size > config.max_file_size:
            raise ParseFileError(
                f"{filepath} exceeds the maximum allowed size of {config.max_file_size} bytes."
            )
        with open(filepath, "r", encoding="UTF-8") as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ParseFileError(error_message) from error
    except OSError as error:
        raise ParseFileError(f"Cannot read {filepath}: {error}") from error

    if len(content) > config.max_document_length:
        error_message = (
            f"{filepath} exceeds the maximum allowed length of "
            f"{config.max_document_length} characters."
        )
        raise ParseFileError(error_message)

    return content


def parse_file(filepath: Path, config: CliConfig | None = None) -> Node:
    """Read and parse a Markdown file.

    Args:
        filepath: Path to the markdown file to parse.
        config: Configuration providing size limits; defaults to a new
            `CliConfig` when omitted.

    Returns:
        Node: Root `Document` node.

    Raises:
        ParseFileError: If configuration is invalid, the file is too large,
            cannot be read or decoded, or contains an unclosed delimiter.
            Unclosed delimiters are reported as ``path:line:column``.

    Examples:
        tree = parse_file(Path("README.md"))
    """
    content = read_document(filepath, config)
    try:
        return parse(content)
    except MarkdownError as error:
        location = error.location(content)
        error_message = (
            f"{filepath}:{location}: unclosed '{error.kind.delimiter}' "
            f"(offset {error.offset})"
        )
        raise ParseFileError(error_message) from error

"""Character-level lexer for inline Markdown."""

from __future__ import annotations

import logging

from .constants import BACKTICK_CHAR, FENCE_LENGTH, TEXT_STOP_CHARS
from .models import Token, TokenKind
from .reader import CharReader

logger = logging.getLogger(__name__)

SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "\\": TokenKind.ESCAPE,
    "*": TokenKind.STAR,
    "_": TokenKind.UNDERSCORE,
    "[": TokenKind.SQUARE_BRACKET_OPEN,
    "]": TokenKind.SQUARE_BRACKET_CLOSE,
    "(": TokenKind.PAREN_OPEN,
    ")": TokenKind.PAREN_CLOSE,
}


def lex(document: str) -> list[Token]:
    """Split a document into delimiter and text tokens.

    Lexing never fails: every character belongs to exactly one token, so
    joining the token texts reproduces `document`. Offsets are code-point
    indices of each token's first character.

    Args:
        document: The markdown content to lex.

    Returns:
        list[Token]: Tokens in source order.

    Examples:
        lex("this is *bold*")
        # [Token(TEXT, "this is ", 0), Token(STAR, "*", 8),
        #  Token(TEXT, "bold", 9), Token(STAR, "*", 13)]
    """
    reader = CharReader(document)
    tokens: list[Token] = []

    while True:
        start = reader.position
        char = reader.next()
        if char is None:
            break

        kind = SINGLE_CHAR_TOKENS.get(char)
        if kind is not None:
            tokens.append(Token(kind, char, start))
            continue

        if char == BACKTICK_CHAR:
            if reader.peek_ahead(FENCE_LENGTH - 1) == BACKTICK_CHAR * (FENCE_LENGTH - 1):
                for _ in range(FENCE_LENGTH - 1):
                    reader.next()
                fence = reader.slice(start, reader.position)
                tokens.append(Token(TokenKind.BACKTICKS, fence, start))
            else:
                tokens.append(Token(TokenKind.BACKTICK, char, start))
            continue

        _move_to_text_end(reader)
        tokens.append(Token(TokenKind.TEXT, reader.slice(start, reader.position), start))

    logger.debug("Lexed %d characters into %d tokens", len(document), len(tokens))
    return tokens


def _move_to_text_end(reader: CharReader) -> None:
    """Advance `reader` to the next stop character or the end of input.

    The stop character itself is left unread.
    """
    while True:
        char = reader.next()
        if char is None or char in TEXT_STOP_CHARS:
            break
    reader.go_back()

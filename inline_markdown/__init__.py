"""
inline-markdown: lexer and parser for inline Markdown.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    inline-markdown notes.md --format json

Library Usage:
    from inline_markdown import Bold, ErrorKind, MarkdownError, lex, parse

    tokens = lex("this is *bold*")
    tree = parse("this is *bold*")
    assert tree.children[1].value == Bold("bold")

    try:
        parse("*bold")
    except MarkdownError as error:
        assert error.kind is ErrorKind.STAR_OPEN
        assert error.offset == 0
"""

from .exceptions import MarkdownError, ParseError, ParseFileError
from .lexer import lex
from .models import (
    Bold,
    Document,
    ErrorKind,
    FixedWidthCode,
    InlineURL,
    Italic,
    Markdown,
    Node,
    PreFormattedFixedWidthCode,
    SourceLocation,
    Text,
    Token,
    TokenKind,
)
from .parser import parse, parse_file, parse_tokens
from .reader import CharReader, TokenReader
from .serialization import format_tokens, format_tree, to_dict, to_json

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "lex",
    "parse",
    "parse_tokens",
    "parse_file",
    # Cursors
    "CharReader",
    "TokenReader",
    # Data models
    "Token",
    "TokenKind",
    "Node",
    "Markdown",
    "Document",
    "Text",
    "Bold",
    "Italic",
    "FixedWidthCode",
    "PreFormattedFixedWidthCode",
    "InlineURL",
    "ErrorKind",
    "SourceLocation",
    # Serialization
    "to_dict",
    "to_json",
    "format_tree",
    "format_tokens",
    # Exceptions
    "MarkdownError",
    "ParseError",
    "ParseFileError",
    # Version
    "__version__",
]

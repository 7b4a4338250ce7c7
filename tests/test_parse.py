from __future__ import annotations

from pathlib import Path

import pytest

from inline_markdown.config import CliConfig
from inline_markdown.exceptions import MarkdownError, ParseFileError
from inline_markdown.lexer import lex
from inline_markdown.models import (
    Bold,
    Document,
    ErrorKind,
    FixedWidthCode,
    InlineURL,
    Italic,
    Node,
    PreFormattedFixedWidthCode,
    Text,
)
from inline_markdown.parser import (
    parse,
    parse_file,
    parse_tokens,
    read_document,
    split_fenced_code,
)


def _children(document: str) -> list:
    tree = parse(document)
    assert tree.value == Document()
    return [child.value for child in tree.children]


def test_plain_text_is_single_text_node():
    assert _children("just some words.") == [Text("just some words.")]


def test_empty_document_has_no_children():
    assert parse("") == Node(Document())


def test_bold():
    assert parse("*bold*") == Node(Document(), [Node(Bold("bold"))])


def test_italic_and_code():
    assert _children("_it_ and `code`") == [
        Italic("it"),
        Text(" and "),
        FixedWidthCode("code"),
    ]


def test_content_nodes_have_no_children():
    tree = parse("a *b* _c_ `d` [e](f)")

    assert all(child.children == [] for child in tree.children)


def test_delimiter_contents_are_literal():
    assert _children("*a _b_ `c`*") == [Bold("a _b_ `c`")]


def test_inline_url():
    assert _children("[title](http://x)") == [InlineURL(title="title", url="http://x")]


def test_brackets_without_url_are_text():
    assert _children("[title]") == [Text("title")]


def test_brackets_followed_by_text_keep_following_token():
    assert _children("[title] rest") == [Text("title"), Text(" rest")]


def test_brackets_followed_by_bold():
    assert _children("[title]*b*") == [Text("title"), Bold("b")]


def test_parentheses_are_literal_text():
    assert _children("see (note)") == [Text("see "), Text("(note)")]


def test_unmatched_closing_delimiters_are_text():
    assert _children("a) b]") == [Text("a"), Text(")"), Text(" b"), Text("]")]


@pytest.mark.parametrize(
    ("document", "kind", "offset"),
    [
        ("*bold", ErrorKind.STAR_OPEN, 0),
        ("abc *bold", ErrorKind.STAR_OPEN, 4),
        ("_it", ErrorKind.UNDERSCORE_OPEN, 0),
        ("x `code", ErrorKind.BACKTICK_OPEN, 2),
        ("```code", ErrorKind.BACKTICKS_OPEN, 0),
        ("[title", ErrorKind.SQUARE_BRACKETS_OPEN, 0),
        ("(note", ErrorKind.PARENTHESES_OPEN, 0),
        ("ab [title](http://x", ErrorKind.PARENTHESES_OPEN, 3),
    ],
)
def test_unclosed_openers_raise(document: str, kind: ErrorKind, offset: int):
    with pytest.raises(MarkdownError) as excinfo:
        parse(document)

    assert excinfo.value.kind is kind
    assert excinfo.value.offset == offset


def test_first_unclosed_opener_wins():
    with pytest.raises(MarkdownError) as excinfo:
        parse("_x_ *a _b")

    assert excinfo.value == MarkdownError(ErrorKind.STAR_OPEN, 4)


def test_escaped_star_is_never_a_bold_opener():
    with pytest.raises(MarkdownError) as excinfo:
        parse("\\*literal*")

    # The second star opens an unclosed bold; the escaped one is text.
    assert excinfo.value == MarkdownError(ErrorKind.STAR_OPEN, 9)


def test_escaped_delimiters_become_text():
    assert _children("\\*literal\\*") == [Text("*"), Text("literal"), Text("*")]


@pytest.mark.parametrize("delimiter", ["*", "_", "`", "```", "["])
def test_each_escapable_delimiter(delimiter: str):
    assert _children(f"\\{delimiter}") == [Text(delimiter)]


def test_double_escape_cancels():
    assert _children("\\\\*b*") == [Bold("b")]


def test_triple_escape_is_literal():
    assert _children("\\\\\\*b") == [Text("*"), Text("b")]


def test_escape_before_plain_text_keeps_text():
    assert _children("\\hello") == [Text("hello")]


def test_escaped_plain_text_is_not_consumed():
    assert _children("\\hello\\*") == [Text("hello"), Text("*")]
    assert _children("\\]x") == [Text("]"), Text("x")]


def test_escape_before_closing_delimiter_keeps_delimiter():
    assert _children("\\)") == [Text(")")]


def test_trailing_escape_is_dropped():
    assert _children("a\\") == [Text("a")]


def test_escape_inside_delimiters():
    assert _children("*a\\*b*") == [Bold("a*b")]
    assert _children("*a\\\\*") == [Bold("a")]
    assert _children("[a\\]b](u)") == [InlineURL(title="a]b", url="u")]


def test_fenced_code_with_language():
    assert _children("```rust\ncode\n```") == [
        PreFormattedFixedWidthCode(lang="rust", code="code")
    ]


def test_single_line_fence():
    assert _children("```code```") == [PreFormattedFixedWidthCode(lang=None, code="code")]


def test_fence_without_language():
    assert _children("```\ncode\n```") == [PreFormattedFixedWidthCode(lang=None, code="code")]


def test_fence_keeps_inner_markup_literal():
    assert _children("```py\na *b* _c_\nd\n```") == [
        PreFormattedFixedWidthCode(lang="py", code="a *b* _c_\nd")
    ]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("rust\ncode\n", PreFormattedFixedWidthCode(lang="rust", code="code")),
        (" rust \ncode", PreFormattedFixedWidthCode(lang=" rust ", code="code")),
        ("\n\ncode\n\n", PreFormattedFixedWidthCode(lang=None, code="\ncode\n")),
        ("code", PreFormattedFixedWidthCode(lang=None, code="code")),
        ("", PreFormattedFixedWidthCode(lang=None, code="")),
    ],
)
def test_split_fenced_code(text: str, expected: PreFormattedFixedWidthCode):
    assert split_fenced_code(text) == expected


def test_fence_language_line_is_kept_verbatim():
    assert _children("``` \ncode```") == [PreFormattedFixedWidthCode(lang=" ", code="code")]


def test_parse_tokens_matches_parse():
    document = "x [a](b) *c* `d`"

    assert parse_tokens(lex(document)) == parse(document)


def test_parse_is_deterministic():
    document = "mix *of* _every_ `kind` ```py\nx\n``` [l](u) (p) \\*"

    assert parse(document) == parse(document)


def test_parse_file(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_text("hello *world*\n", encoding="utf-8")

    tree = parse_file(target)

    assert [child.value for child in tree.children] == [
        Text("hello "),
        Bold("world"),
        Text("\n"),
    ]


def test_parse_file_reports_line_and_column(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_text("first line\nsecond *open\n", encoding="utf-8")

    with pytest.raises(ParseFileError) as excinfo:
        parse_file(target)

    assert f"{target}:2:8" in str(excinfo.value)
    assert "unclosed '*'" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, MarkdownError)


def test_parse_file_rejects_invalid_utf8(tmp_path: Path):
    target = tmp_path / "bad.md"
    target.write_bytes(b"\xff\xfe broken")

    with pytest.raises(ParseFileError, match="Invalid UTF-8"):
        parse_file(target)


def test_parse_file_enforces_size_limit(tmp_path: Path):
    target = tmp_path / "big.md"
    target.write_text("x" * 20, encoding="utf-8")

    with pytest.raises(ParseFileError, match="maximum allowed size"):
        parse_file(target, CliConfig(max_file_size=10))


def test_parse_file_enforces_document_length(tmp_path: Path):
    target = tmp_path / "long.md"
    target.write_text("é" * 6, encoding="utf-8")

    with pytest.raises(ParseFileError, match="maximum allowed length"):
        parse_file(target, CliConfig(max_document_length=5))


def test_parse_file_rejects_invalid_config(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_text("text", encoding="utf-8")

    with pytest.raises(ParseFileError):
        parse_file(target, CliConfig(indent_width=0))


def test_parse_file_missing(tmp_path: Path):
    with pytest.raises(ParseFileError):
        parse_file(tmp_path / "missing.md")


def test_read_document_allows_file_at_size_limit(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_text("12345", encoding="utf-8")

    assert read_document(target, CliConfig(max_file_size=5)) == "12345"
    with pytest.raises(ParseFileError, match="maximum allowed size of 4 bytes"):
        read_document(target, CliConfig(max_file_size=4))


def test_read_document_rejects_directory(tmp_path: Path):
    with pytest.raises(ParseFileError, match="Cannot read"):
        read_document(tmp_path)

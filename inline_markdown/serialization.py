"""Inspection formats for tokens and AST nodes.

`to_dict` and `to_json` give a JSON-compatible view of a tree; `format_tree`
and `format_tokens` give line-oriented text for the command line. Output is
deterministic, so equal trees always serialize identically.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any, assert_never

from .models import (
    Bold,
    Document,
    FixedWidthCode,
    InlineURL,
    Italic,
    Markdown,
    Node,
    PreFormattedFixedWidthCode,
    Text,
    Token,
)


def value_fields(value: Markdown) -> dict[str, Any]:
    """Return the content fields of a Markdown value, keyed by name.

    Examples:
        value_fields(InlineURL("title", "https://example.com"))
        # {"title": "title", "url": "https://example.com"}
    """
    match value:
        case Document():
            return {}
        case Text(text=text) | Bold(text=text) | Italic(text=text) | FixedWidthCode(text=text):
            return {"text": text}
        case PreFormattedFixedWidthCode(lang=lang, code=code):
            return {"lang": lang, "code": code}
        case InlineURL(title=title, url=url):
            return {"title": title, "url": url}
        case _:
            assert_never(value)


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node and its children to a JSON-compatible dict.

    The root always carries a ``children`` list; content nodes only when
    they have children.

    Examples:
        to_dict(parse("*hi*"))
        # {"type": "Document", "children": [{"type": "Bold", "text": "hi"}]}
    """
    result: dict[str, Any] = {"type": type(node.value).__name__}
    result.update(value_fields(node.value))
    if node.children or isinstance(node.value, Document):
        result["children"] = [to_dict(child) for child in node.children]
    return result


def to_json(node: Node, indent: int | None = None) -> str:
    return json.dumps(to_dict(node), indent=indent, sort_keys=True, ensure_ascii=False)


def format_tree(node: Node, indent_width: int = 2) -> str:
    """Render a tree as indented lines, one node per line.

    Examples:
        print(format_tree(parse("a *b*")))
        # Document
        #   Text text='a '
        #   Bold text='b'
    """
    lines: list[str] = []
    _append_tree_lines(node, 0, indent_width, lines)
    return "\n".join(lines)


def _append_tree_lines(node: Node, depth: int, indent_width: int, lines: list[str]) -> None:
    attributes = " ".join(f"{key}={value!r}" for key, value in value_fields(node.value).items())
    label = type(node.value).__name__
    if attributes:
        label = f"{label} {attributes}"
    lines.append(f"{' ' * (indent_width * depth)}{label}")
    for child in node.children:
        _append_tree_lines(child, depth + 1, indent_width, lines)


def format_tokens(tokens: Iterable[Token]) -> str:
    """Render tokens as ``offset KIND 'text'`` lines."""
    return "\n".join(f"{token.offset} {token.kind.name} {token.text!r}" for token in tokens)

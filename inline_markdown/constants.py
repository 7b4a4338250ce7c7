"""Constants used across the inline-markdown package."""

from __future__ import annotations

# Delimiter characters
BACKTICK_CHAR = "`"
FENCE_LENGTH = 3

# Characters that end a run of plain text
TEXT_STOP_CHARS = frozenset("\\*_`[]()")

# Limits and output defaults
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_MAX_DOCUMENT_LENGTH = 1_000_000
DEFAULT_INDENT_WIDTH = 2
OUTPUT_FORMATS = ("tree", "json")

MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".mkdn")

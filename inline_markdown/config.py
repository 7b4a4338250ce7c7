"""Configuration loading and management."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

from .constants import (
    DEFAULT_INDENT_WIDTH,
    DEFAULT_MAX_DOCUMENT_LENGTH,
    DEFAULT_MAX_FILE_SIZE,
    OUTPUT_FORMATS,
)

CONFIG_TABLE = "inline-markdown"
DOTFILE_NAME = ".inline-markdown.toml"
MAX_FILE_SIZE_ENV_VAR = "INLINE_MARKDOWN_MAX_FILE_SIZE"

# Files checked in each directory, in order, with the tables each may hold
CONFIG_SOURCES: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    ("pyproject.toml", (("tool", CONFIG_TABLE),)),
    (DOTFILE_NAME, ((CONFIG_TABLE,), ("tool", CONFIG_TABLE))),
)


@dataclass
class CliConfig:
    """Configuration for printing parsed Markdown from the command line.

    Attributes:
        output_format: How the AST is printed, ``"tree"`` or ``"json"``.
        indent_width: Spaces per nesting level in either output format.
        show_tokens: Print the lexer tokens instead of the AST.
        max_file_size: Maximum file size in bytes that will be processed.
        max_document_length: Maximum document length in characters.

    Examples:
        CliConfig(output_format="json", indent_width=4)
    """

    # Output
    output_format: str = "tree"
    indent_width: int = DEFAULT_INDENT_WIDTH
    show_tokens: bool = False

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    max_document_length: int = DEFAULT_MAX_DOCUMENT_LENGTH


SETTING_NAMES = frozenset(field.name for field in fields(CliConfig))


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`indent_width` must be a positive integer")
    """


def load_config(search_path: Path) -> CliConfig:
    """Load configuration from the nearest directory that defines it.

    Starting at `search_path` and moving towards the filesystem root, each
    directory is checked for ``[tool.inline-markdown]`` in `pyproject.toml`,
    then ``[inline-markdown]`` or ``[tool.inline-markdown]`` in
    `.inline-markdown.toml`. The first table found wins; files that cannot
    be read or are not valid TOML are ignored.

    Args:
        search_path: Directory where the search starts.

    Returns:
        CliConfig: Settings from the table found, or defaults.

    Raises:
        ConfigError: If the table found is not a table or holds unknown or
            duplicated settings.

    Examples:
        load_config(Path("docs"))
    """
    start = search_path.resolve()
    for directory in (start, *start.parents):
        for filename, table_paths in CONFIG_SOURCES:
            config_file = directory / filename
            table = _find_table(config_file, table_paths)
            if table is not None:
                return config_from_table(table, config_file)
    return CliConfig()


def _find_table(config_file: Path, table_paths: tuple[tuple[str, ...], ...]) -> object | None:
    # TOML has no null, so None always means "no such table".
    if not config_file.is_file():
        return None
    try:
        document = tomllib.loads(config_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        value: object = document
        for key in table_path:
            value = value.get(key) if isinstance(value, dict) else None
        if value is not None:
            return value
    return None


def config_from_table(table: object, source: Path | str) -> CliConfig:
    """Build a `CliConfig` from a TOML table.

    Keys may use dashes or underscores (``indent-width`` or
    ``indent_width``), but a setting may only be given once.

    Args:
        table: Parsed TOML value of the configuration table.
        source: File the table came from, used in error messages.

    Returns:
        CliConfig: Defaults updated with the table's settings. Values are not
        validated here.

    Raises:
        ConfigError: If `table` is not a table, or a key is unknown or
            duplicated.

    Examples:
        config_from_table({"output-format": "json"}, "pyproject.toml")
    """
    if not isinstance(table, dict):
        raise ConfigError(f"`[{CONFIG_TABLE}]` in {source} must be a table")

    settings: dict[str, object] = {}
    for key, value in table.items():
        name = key.replace("-", "_")
        if name not in SETTING_NAMES:
            raise ConfigError(f"Unknown setting `{key}` in {source}")
        if name in settings:
            raise ConfigError(f"Setting `{name}` is given more than once in {source}")
        settings[name] = value
    return CliConfig(**settings)


def env_overrides(environ: Mapping[str, str] | None = None) -> dict[str, object]:
    """Read setting overrides from the environment.

    Only `INLINE_MARKDOWN_MAX_FILE_SIZE` is recognized; its range is checked
    by `validate_config`.

    Raises:
        ConfigError: If the variable is set but is not an integer.
    """
    environ = os.environ if environ is None else environ
    raw_value = environ.get(MAX_FILE_SIZE_ENV_VAR)
    if raw_value is None:
        return {}
    try:
        return {"max_file_size": int(raw_value)}
    except ValueError as error:
        raise ConfigError(
            f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {raw_value!r}"
        ) from error


def validate_config(config: CliConfig) -> None:
    """Validate a `CliConfig` instance.

    Raises:
        ConfigError: If the output format is unknown, `show_tokens` is not a
            boolean, or a numeric setting is not a positive integer.

    Examples:
        validate_config(CliConfig(output_format="json"))
    """
    if config.output_format not in OUTPUT_FORMATS:
        raise ConfigError(f"`output_format` must be one of: {', '.join(OUTPUT_FORMATS)}")
    if not isinstance(config.show_tokens, bool):
        raise ConfigError("`show_tokens` must be a boolean")

    for name in ("indent_width", "max_file_size", "max_document_length"):
        value = getattr(config, name)
        # bool is an int subclass but never a valid size
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigError(f"`{name}` must be a positive integer")


def build_config(search_path: Path, **overrides: object) -> CliConfig:
    """Resolve the configuration for one run.

    Settings come from the nearest config file, then the environment, then
    `overrides` (command line options, where None means "not given").

    Raises:
        ConfigError: If loading fails or the resulting settings are invalid.

    Examples:
        config = build_config(Path.cwd(), output_format="json")
    """
    config = load_config(search_path)
    changes = env_overrides()
    changes.update((name, value) for name, value in overrides.items() if value is not None)
    if changes:
        config = replace(config, **changes)
    validate_config(config)
    return config

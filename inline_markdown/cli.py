"""
Parses a markdown file into its inline AST and prints it.
With --tokens, prints the lexer output instead.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import ParseFileError
from .filesystem import resolve_markdown_path
from .lexer import lex
from .parser import parse_file, read_document
from .serialization import format_tokens, format_tree, to_json

__all__ = ["cli"]


@click.command()
@click.version_option()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["tree", "json"]),
    help="AST output format (tree or json)",
)
@click.option("--indent", "indent_width", type=int, help="Spaces per nesting level")
@click.option("--tokens/--no-tokens", "show_tokens", default=None, help="Print lexer tokens")
@click.option("-v", "--verbose", is_flag=True, help="Log lexer and parser activity")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    output_format: str | None = None,
    indent_width: int | None = None,
    show_tokens: bool | None = None,
    verbose: bool = False,
):
    """
    Entry point for printing the inline Markdown AST of a file.

    Args:
        filepath: Path to the Markdown file to process.
        output_format: Override for the AST output format.
        indent_width: Override for the indentation width.
        show_tokens: Print tokens instead of the AST.
        verbose: Enable debug logging.

    Raises:
        click.BadParameter: If the path is invalid or the configuration
            contains unsupported values.
        click.ClickException: If the file cannot be read, exceeds limits, or
            contains an unclosed delimiter.

    Examples:
        inline-markdown README.md --format json --indent 4
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    base_dir = Path.cwd().resolve()
    try:
        filepath = resolve_markdown_path(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(
            filepath.parent,
            output_format=output_format,
            indent_width=indent_width,
            show_tokens=show_tokens,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    # Prints tokens
    if config.show_tokens:
        try:
            content = read_document(filepath, config)
        except ParseFileError as error:
            raise click.ClickException(str(error)) from error
        output = format_tokens(lex(content))
        if output:
            click.echo(output)
        return

    # Prints the AST
    try:
        tree = parse_file(filepath, config)
    except ParseFileError as error:
        raise click.ClickException(str(error)) from error

    if config.output_format == "json":
        click.echo(to_json(tree, indent=config.indent_width))
    else:
        click.echo(format_tree(tree, config.indent_width))


if __name__ == "__main__":
    cli()

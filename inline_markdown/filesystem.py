"""Input path checks for the command line tool."""

from __future__ import annotations

from pathlib import Path

from .constants import MARKDOWN_EXTENSIONS


def first_symlink(path: Path) -> Path | None:
    """Return the first symlink met while walking down to `path`, if any.

    Examples:
        first_symlink(Path("/tmp/link/child.md"))  # Path("/tmp/link")
    """
    current = Path(path.anchor)
    for part in path.parts[1:] if path.anchor else path.parts:
        current = current / part
        if current.is_symlink():
            return current
    return None


def resolve_markdown_path(raw_path: str, base_dir: Path) -> Path:
    """Turn a user-supplied path into an absolute Markdown file path.

    The file must exist, be reached without symlinks, sit under `base_dir`
    and carry a Markdown extension.

    Args:
        raw_path: Path given on the command line, absolute or relative.
        base_dir: Resolved directory the file has to live under.

    Returns:
        Path: Absolute path of the file.

    Raises:
        ValueError: If any of the rules above is broken.

    Examples:
        resolve_markdown_path("docs/notes.md", Path.cwd().resolve())
    """
    path = Path(raw_path).expanduser().absolute()

    link = first_symlink(path)
    if link is not None:
        raise ValueError(f"Symlinks are not supported: {link}")

    if not path.is_file():
        raise ValueError(f"{path} is not an existing regular file.")

    if not path.is_relative_to(base_dir):
        raise ValueError(f"{path} is outside of the working directory {base_dir}.")

    if path.suffix.lower() not in MARKDOWN_EXTENSIONS:
        raise ValueError(
            f"{path} is not a Markdown file (expected one of: {', '.join(MARKDOWN_EXTENSIONS)})."
        )

    return path

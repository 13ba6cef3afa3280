"""Directory enumeration for annotation files."""

from __future__ import annotations

from pathlib import Path


def find_files_in_dir(directory: str | Path, extension: str, recursive: bool = True) -> list[str]:
    """List files with ``extension`` below ``directory``.

    Args:
        directory: Root directory to search.
        extension: Extension without the leading dot (e.g. "asf").
        recursive: Descend into subdirectories.

    Returns:
        Sorted base paths with the extension stripped. The order is stable
        and is used for positional rectangle association. Matching is
        case-sensitive because callers rebuild file names from the base path.
    """
    root = Path(directory)
    if not root.is_dir():
        return []

    suffix = "." + extension.lstrip(".")
    candidates = root.rglob("*") if recursive else root.glob("*")
    return sorted(
        str(p.with_suffix(""))
        for p in candidates
        if p.is_file() and p.suffix == suffix
    )

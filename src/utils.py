"""Shared path utilities for import-firewall."""

from __future__ import annotations

from pathlib import Path


def normalize_path(file_path: str | Path) -> str:
    """Normalize a file path to forward-slash separators.

    Args:
        file_path: Path in any separator convention (e.g., "C:\\proj\\src\\app\\x.js")

    Returns:
        The same path with every backslash replaced by "/".

    Examples:
        >>> normalize_path("C:\\\\proj\\\\src\\\\app\\\\x.js")
        'C:/proj/src/app/x.js'
        >>> normalize_path(Path("src/app/x.js"))
        'src/app/x.js'
    """
    path_str = file_path.as_posix() if isinstance(file_path, Path) else str(file_path)
    return path_str.replace("\\", "/")


def split_segments(path: str) -> list[str]:
    """Split a normalized path into non-empty segments."""
    return [part for part in path.split("/") if part]


def join_segments(parts: list[str]) -> str:
    """Reassemble segments into an absolute-style path with a trailing slash.

    Examples:
        >>> join_segments(["project", "src", "app"])
        '/project/src/app/'
        >>> join_segments([])
        '/'
    """
    if not parts:
        return "/"
    return "/" + "/".join(parts) + "/"

"""Map filesystem entries under the content root to virtual paths (/works/2024/post.md)."""

import os
from pathlib import Path

from .config import DEFAULT_VIRTUAL_ROOT


def virtual_path(root, candidate, virtual_root: str = DEFAULT_VIRTUAL_ROOT) -> str:
    """
    Return the virtual path for candidate, which must be root or lie below it.
    No escaping is applied; the result is an opaque key, not a filesystem path.
    """
    rel = os.path.relpath(Path(candidate), Path(root))
    rel = Path(rel).as_posix().strip("/")
    if rel in ("", "."):
        return virtual_root
    return f"{virtual_root}/{rel}"


def parent_virtual_path(path: str) -> str | None:
    """Drop the last /-segment. None for the root (nothing left above it)."""
    path = path.rstrip("/")
    parent, sep, _ = path.rpartition("/")
    if not sep or not parent:
        return None
    return parent

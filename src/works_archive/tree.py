"""Build the content tree for the browser UI (nested dict nodes with optional thumbnails)."""

import logging
import os
from pathlib import Path
from typing import Any

from ._utils import mask_path_for_log
from .config import DEFAULT_THUMBNAIL_PREFIX, DEFAULT_VIRTUAL_ROOT
from .paths import parent_virtual_path, virtual_path
from .thumbnail import extract_thumbnail

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIX = ".md"


def _skipped(entry: str, reason: str, exc: BaseException | None = None) -> None:
    """One diagnostic record per entry left out of the tree (or left without a thumbnail)."""
    logger.warning(
        "Skipped %s: %s%s",
        mask_path_for_log(entry),
        reason,
        f" ({type(exc).__name__})" if exc else "",
        extra={"skipped_entry": entry, "reason": reason},
    )


def read_thumbnail(file_path: Path, prefix: str = DEFAULT_THUMBNAIL_PREFIX) -> str | None:
    """Read a markdown file and return its thumbnail URL; unreadable files have none."""
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _skipped(str(file_path), "thumbnail read failed", e)
        return None
    return extract_thumbnail(content, prefix)


def walk_entries(
    root: Path,
    *,
    virtual_root: str = DEFAULT_VIRTUAL_ROOT,
    thumbnail_prefix: str = DEFAULT_THUMBNAIL_PREFIX,
    max_depth: int | None = None,
) -> dict[str, dict[str, Any]]:
    """
    Walk root (symlinks not followed) and return a flat table: virtual path -> node.
    The root itself is not included. max_depth=1 lists only root's direct entries.
    """
    table: dict[str, dict[str, Any]] = {}

    def on_error(err: OSError) -> None:
        _skipped(err.filename or str(root), "directory not readable", err)

    for dirpath, dirnames, filenames in os.walk(root, followlinks=False, onerror=on_error):
        current = Path(dirpath)
        depth = len(current.relative_to(root).parts) + 1
        if max_depth is not None and depth >= max_depth:
            listed = list(dirnames)
            dirnames[:] = []
        else:
            listed = dirnames
        for name in [*listed, *filenames]:
            full_path = current / name
            is_dir = full_path.is_dir()
            node: dict[str, Any] = {
                "name": name,
                "path": virtual_path(root, full_path, virtual_root),
                "is_dir": is_dir,
            }
            if not is_dir and name.lower().endswith(DOCUMENT_SUFFIX):
                thumbnail = read_thumbnail(full_path, thumbnail_prefix)
                if thumbnail:
                    node["thumbnail"] = thumbnail
            table[node["path"]] = node
    return table


def index_by_parent(paths) -> dict[str, list[str]]:
    """Group virtual paths by their parent path; each group sorted ascending."""
    by_parent: dict[str, list[str]] = {}
    for path in paths:
        parent = parent_virtual_path(path)
        if parent is not None:
            by_parent.setdefault(parent, []).append(path)
    for children in by_parent.values():
        children.sort()
    return by_parent


def _materialize(
    node: dict[str, Any],
    table: dict[str, dict[str, Any]],
    by_parent: dict[str, list[str]],
) -> dict[str, Any]:
    """Copy node out of the table and attach its (recursively materialized) children."""
    result = dict(node)
    children = [
        _materialize(table[child_path], table, by_parent)
        for child_path in by_parent.get(node["path"], [])
    ]
    if children:
        result["children"] = children
    return result


def build_tree(
    root,
    *,
    virtual_root: str = DEFAULT_VIRTUAL_ROOT,
    thumbnail_prefix: str = DEFAULT_THUMBNAIL_PREFIX,
    max_depth: int | None = None,
) -> dict[str, Any]:
    """
    Build a single rooted tree from the content root.
    Node: name, path, is_dir, children (only if non-empty), thumbnail (only if found).
    A missing or unreadable root gives an empty root node, not an error.
    """
    root = Path(root)
    if not root.is_dir():
        logger.warning("Content root not found or not a directory: %s", mask_path_for_log(root))
        table = {}
    else:
        table = walk_entries(
            root,
            virtual_root=virtual_root,
            thumbnail_prefix=thumbnail_prefix,
            max_depth=max_depth,
        )
    root_node = table.pop(virtual_root, None) or {
        "name": virtual_root.rsplit("/", 1)[-1],
        "path": virtual_root,
        "is_dir": True,
    }
    return _materialize(root_node, table, index_by_parent(table))

"""Shared helpers for works_archive: log-safe paths, error messages, containment."""

import os
from pathlib import Path


def is_production() -> bool:
    return (os.environ.get("PRODUCTION") or "").strip().lower() in ("1", "true", "yes")


def safe_error_message(e: BaseException, *, production: bool | None = None) -> str:
    """Return error text safe for API responses: exception type only in production."""
    if production is None:
        production = is_production()
    return type(e).__name__ if production else f"{type(e).__name__}: {e}"


def mask_path_for_log(path: str | Path) -> str:
    """Return the last component of path so logs never carry full filesystem paths."""
    try:
        p = Path(path)
        return p.name if p.name else str(p)[-50:]
    except (TypeError, ValueError):
        return "<path>"


def path_inside_base(path: Path, base: Path) -> bool:
    """True if path resolves to base or somewhere below it (symlinks followed)."""
    try:
        resolved = path.resolve()
        base_resolved = base.resolve()
        return resolved == base_resolved or resolved.is_relative_to(base_resolved)
    except (ValueError, OSError):
        return False

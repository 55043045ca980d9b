"""Startup configuration: read once from the environment, then passed around explicitly."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PORT = 8080
DEFAULT_HOST = "0.0.0.0"
DEFAULT_CONTENT_ROOT = "works"
DEFAULT_PUBLIC_DIR = "public"
DEFAULT_VIRTUAL_ROOT = "/works"
DEFAULT_THUMBNAIL_PREFIX = "https://github.com/user-attachments/"


@dataclass(frozen=True)
class ArchiveConfig:
    content_root: Path
    public_dir: Path
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    virtual_root: str = DEFAULT_VIRTUAL_ROOT
    thumbnail_prefix: str = DEFAULT_THUMBNAIL_PREFIX
    tree_max_depth: int | None = None


def parse_port(raw: str | None, default: int = DEFAULT_PORT) -> int:
    """Parse a TCP port; anything missing, non-numeric or out of range gives default."""
    try:
        port = int((raw or "").strip())
    except ValueError:
        return default
    if not 0 < port <= 65535:
        return default
    return port


def parse_max_depth(raw: str | None) -> int | None:
    """Parse a walk depth limit. Empty, non-numeric or < 1 means unbounded."""
    try:
        depth = int((raw or "").strip())
    except ValueError:
        return None
    return depth if depth >= 1 else None


def _env(environ: Mapping[str, str], name: str, default: str) -> str:
    v = (environ.get(name) or "").strip()
    return v or default


def load_config(
    environ: Mapping[str, str] | None = None,
    *,
    content_root: str | Path | None = None,
    public_dir: str | Path | None = None,
    host: str | None = None,
    port: int | None = None,
    tree_max_depth: int | None = None,
) -> ArchiveConfig:
    """
    Build ArchiveConfig from environment variables.
    Explicit keyword arguments (CLI flags) take precedence over the environment.
    """
    env = os.environ if environ is None else environ
    virtual_root = "/" + _env(env, "ARCHIVE_VIRTUAL_ROOT", DEFAULT_VIRTUAL_ROOT).strip("/")
    return ArchiveConfig(
        content_root=Path(content_root or _env(env, "ARCHIVE_CONTENT_ROOT", DEFAULT_CONTENT_ROOT)).resolve(),
        public_dir=Path(public_dir or _env(env, "ARCHIVE_PUBLIC_DIR", DEFAULT_PUBLIC_DIR)).resolve(),
        host=host or _env(env, "ARCHIVE_HOST", DEFAULT_HOST),
        port=port if port is not None else parse_port(env.get("PORT")),
        virtual_root=virtual_root,
        thumbnail_prefix=_env(env, "ARCHIVE_THUMBNAIL_PREFIX", DEFAULT_THUMBNAIL_PREFIX),
        tree_max_depth=(
            tree_max_depth
            if tree_max_depth is not None
            else parse_max_depth(env.get("ARCHIVE_TREE_MAX_DEPTH"))
        ),
    )

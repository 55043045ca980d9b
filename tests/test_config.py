"""Tests for config."""

from pathlib import Path

import pytest

from works_archive.config import (
    DEFAULT_PORT,
    DEFAULT_THUMBNAIL_PREFIX,
    load_config,
    parse_max_depth,
    parse_port,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, DEFAULT_PORT),
        ("", DEFAULT_PORT),
        ("3000", 3000),
        (" 9000 ", 9000),
        ("abc", DEFAULT_PORT),
        ("0", DEFAULT_PORT),
        ("70000", DEFAULT_PORT),
        ("-1", DEFAULT_PORT),
    ],
)
def test_parse_port(raw, expected) -> None:
    assert parse_port(raw) == expected


def test_parse_max_depth() -> None:
    assert parse_max_depth(None) is None
    assert parse_max_depth("2") == 2
    assert parse_max_depth("0") is None
    assert parse_max_depth("deep") is None


def test_load_config_defaults(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    config = load_config({})
    assert config.port == DEFAULT_PORT
    assert config.content_root == (tmp_path / "works").resolve()
    assert config.public_dir == (tmp_path / "public").resolve()
    assert config.virtual_root == "/works"
    assert config.thumbnail_prefix == DEFAULT_THUMBNAIL_PREFIX
    assert config.tree_max_depth is None


def test_load_config_from_env(tmp_path: Path) -> None:
    env = {
        "PORT": "5005",
        "ARCHIVE_CONTENT_ROOT": str(tmp_path / "docs"),
        "ARCHIVE_PUBLIC_DIR": str(tmp_path / "static"),
        "ARCHIVE_HOST": "127.0.0.1",
        "ARCHIVE_VIRTUAL_ROOT": "archive/",
        "ARCHIVE_TREE_MAX_DEPTH": "2",
    }
    config = load_config(env)
    assert config.port == 5005
    assert config.host == "127.0.0.1"
    assert config.content_root == (tmp_path / "docs").resolve()
    assert config.public_dir == (tmp_path / "static").resolve()
    assert config.virtual_root == "/archive"
    assert config.tree_max_depth == 2


def test_load_config_flags_override_env(tmp_path: Path) -> None:
    env = {"PORT": "5005", "ARCHIVE_CONTENT_ROOT": str(tmp_path / "docs")}
    config = load_config(env, content_root=tmp_path / "flag", port=7000, tree_max_depth=1)
    assert config.port == 7000
    assert config.content_root == (tmp_path / "flag").resolve()
    assert config.tree_max_depth == 1

"""Pytest fixtures."""

from pathlib import Path

import pytest

from works_archive.config import ArchiveConfig
from works_archive.web import create_app

TRUSTED = "https://github.com/user-attachments/"


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """Small archive: two years, documents with and without thumbnails, one non-markdown file."""
    root = tmp_path / "works"
    (root / "2023").mkdir(parents=True)
    (root / "2024").mkdir()
    (root / "2024" / "my-post.md").write_text("# Hello\n", encoding="utf-8")
    (root / "2024" / "gallery.md").write_text(
        f'# Gallery\n\n<img src="{TRUSTED}abc123">\n\n![x](http://other.example/y.png)\n',
        encoding="utf-8",
    )
    (root / "2024" / "notes.txt").write_text(f'<img src="{TRUSTED}txt">', encoding="utf-8")
    (root / "2023" / "old_story.md").write_text("Plain text.\n", encoding="utf-8")
    return root


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<html><body>archive index</body></html>", encoding="utf-8")
    (public / "404.html").write_text("<html><body>custom missing page</body></html>", encoding="utf-8")
    return public


@pytest.fixture
def config(content_root: Path, public_dir: Path) -> ArchiveConfig:
    return ArchiveConfig(content_root=content_root, public_dir=public_dir)


@pytest.fixture
def client(config: ArchiveConfig):
    app = create_app(config)
    app.config["TESTING"] = True
    return app.test_client()

"""Render one archived document (<root>/<year>/<title>.md) as a standalone HTML page."""

import logging
from pathlib import Path
from typing import NamedTuple

from jinja2 import Environment, PackageLoader, select_autoescape
from markdown_it import MarkdownIt

from ._utils import mask_path_for_log, path_inside_base
from .tree import DOCUMENT_SUFFIX

logger = logging.getLogger(__name__)

MAX_YEAR_LEN = 20
MAX_TITLE_LEN = 300
_SEPARATORS = ("/", "\\")

_md = MarkdownIt("commonmark")
_templates = Environment(
    loader=PackageLoader("works_archive", "templates"),
    autoescape=select_autoescape(["html"]),
)


class RenderResult(NamedTuple):
    status: int
    html: str

    @property
    def state(self) -> str:
        return {200: "rendered", 400: "bad_request"}.get(self.status, "not_found")


def validate_identifiers(year: str, title: str) -> bool:
    """Reject oversized identifiers and anything that could leave its path segment."""
    if len(year) > MAX_YEAR_LEN or len(title) > MAX_TITLE_LEN:
        return False
    for value in (year, title):
        if ".." in value or any(sep in value for sep in _SEPARATORS):
            return False
    return True


def display_title(title: str) -> str:
    """my-post_draft -> My Post Draft (only first letters change)."""
    words = title.replace("-", " ").replace("_", " ").split()
    return " ".join(w[:1].upper() + w[1:] for w in words)


def markdown_to_html(text: str) -> str:
    return _md.render(text)


def wrap_page(title: str, year: str, body_html: str) -> str:
    """Embed converted document HTML into the page. body_html goes in unescaped."""
    return _templates.get_template("document.html").render(
        title=display_title(title),
        year=year,
        body=body_html,
    )


def not_found_page(year: str, title: str) -> RenderResult:
    page = _templates.get_template("not_found.html").render(
        identifier=f"{year}/{title}{DOCUMENT_SUFFIX}"
    )
    return RenderResult(404, page)


def bad_request_page() -> RenderResult:
    return RenderResult(400, _templates.get_template("bad_request.html").render())


def resolve_document(content_root, year: str, title: str) -> Path | None:
    """Return the document path if it is a regular file inside content_root."""
    root = Path(content_root)
    file_path = root / year / f"{title}{DOCUMENT_SUFFIX}"
    if not path_inside_base(file_path, root) or not file_path.is_file():
        return None
    return file_path


def render_document(content_root, year: str, title: str) -> RenderResult:
    """Validate -> resolve -> read -> convert -> wrap; any failure ends in 400 or 404."""
    if not validate_identifiers(year, title):
        logger.debug("Rejected identifiers (year=%d chars, title=%d chars)", len(year), len(title))
        return bad_request_page()
    file_path = resolve_document(content_root, year, title)
    if file_path is None:
        logger.info("Document not found: %s/%s%s", year, title, DOCUMENT_SUFFIX)
        return not_found_page(year, title)
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.info("Document not readable: %s (%s)", mask_path_for_log(file_path), type(e).__name__)
        return not_found_page(year, title)
    return RenderResult(200, wrap_page(title, year, markdown_to_html(content)))

"""Pick a thumbnail for a document: the first raw-HTML image hosted on the trusted asset host."""

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .config import DEFAULT_THUMBNAIL_PREFIX

_md = MarkdownIt("commonmark")


def _raw_html_fragments(tokens: list[Token]):
    """Yield raw HTML token contents in reading order (block-level and inline)."""
    for token in tokens:
        if token.type == "html_block":
            yield token.content
        elif token.type == "inline" and token.children:
            for child in token.children:
                if child.type == "html_inline":
                    yield child.content


def find_src(fragment: str, prefix: str = DEFAULT_THUMBNAIL_PREFIX) -> str | None:
    """Return the src="..." value in fragment that starts with prefix, if any."""
    start = fragment.find(f'src="{prefix}')
    if start == -1:
        return None
    rest = fragment[start + len('src="') :]
    end = rest.find('"')
    if end == -1:
        return None
    value = rest[:end]
    # marker may sit in plain text; only a complete quoted value counts
    if not value.startswith(prefix):
        return None
    return value


def extract_thumbnail(markdown_text: str, prefix: str = DEFAULT_THUMBNAIL_PREFIX) -> str | None:
    """
    Return the first <img src="{prefix}..."> URL embedded as raw HTML, or None.
    Markdown-native images (![alt](url)) never qualify, even on the trusted host.
    """
    for fragment in _raw_html_fragments(_md.parse(markdown_text)):
        src = find_src(fragment, prefix)
        if src:
            return src
    return None

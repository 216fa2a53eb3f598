"""HTML helpers for rich-text product fields."""

import html
import re
from typing import Iterable

from bs4 import BeautifulSoup

__all__ = ["strip_tags", "looks_like_html", "wrap_paragraph", "wrap_list"]

_TAG_RE = re.compile(r"<[a-zA-Z/][^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def looks_like_html(text: str) -> bool:
    """Return True if the text contains at least one HTML tag."""
    return bool(_TAG_RE.search(text or ""))


def strip_tags(markup: str) -> str:
    """Convert an HTML fragment to plain text.

    List items and block elements are separated by single spaces so that
    ``<ul><li>A</li><li>B</li></ul>`` becomes ``"A B"`` rather than ``"AB"``.
    """
    if not markup:
        return ""
    soup = BeautifulSoup(markup, "html.parser")
    text = " ".join(soup.stripped_strings)
    return _WHITESPACE_RE.sub(" ", text).strip()


def wrap_paragraph(text: str) -> str:
    """Wrap plain text in a paragraph, leaving existing HTML alone."""
    if looks_like_html(text):
        return text
    return f"<p>{html.escape(text.strip(), quote=False)}</p>"


def wrap_list(items: Iterable[str]) -> str:
    """Render plain-text items as an HTML bullet list."""
    lis = "".join(
        f"<li>{html.escape(str(item).strip(), quote=False)}</li>"
        for item in items
        if str(item).strip()
    )
    return f"<ul>{lis}</ul>"

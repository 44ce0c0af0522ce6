from __future__ import annotations

import uuid
from typing import Any, Dict, Optional

from bs4 import BeautifulSoup

from .models import Article

SNIPPET_LIMIT = 300
ELLIPSIS = "..."


def _soup(html: str) -> BeautifulSoup:
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return soup


def _snippet_from_soup(soup: BeautifulSoup) -> str:
    text = " ".join(soup.get_text(" ").split())
    if len(text) > SNIPPET_LIMIT:
        return text[:SNIPPET_LIMIT].rstrip() + ELLIPSIS
    return text


def make_snippet(html: str) -> str:
    """Plain-text preview of ``html``: whitespace collapsed, cut at 300 chars with a trailing ellipsis."""
    return _snippet_from_soup(_soup(html))


def _first_image(soup: BeautifulSoup) -> Optional[str]:
    img = soup.find("img", src=True)
    if img is None:
        return None
    src = img["src"].strip()
    return src or None


def to_article(entry: Dict[str, Any], feed_id: str) -> Article:
    """
    Convert a parsed entry dict into an Article.

    Expects the dict produced by `rss_reader.parser.parse_entry`:
    - title, link, pub_date, content (strings, possibly empty)
    - author, thumbnail (optional)

    The snippet and the inline-image thumbnail fallback are derived from ``content``.
    A fresh id is assigned on every call.
    """
    content = entry.get("content") or ""
    soup = _soup(content)
    thumbnail = entry.get("thumbnail") or _first_image(soup)

    return Article(
        id=str(uuid.uuid4()),
        feed_id=feed_id,
        title=entry.get("title") or "",
        link=entry.get("link") or "",
        pub_date=entry.get("pub_date") or "",
        content=content,
        content_snippet=_snippet_from_soup(soup),
        author=entry.get("author") or None,
        thumbnail=thumbnail,
    )

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

FEED_MIMETYPES = ("application/rss+xml", "application/atom+xml")


def discover_feed_url(html: str, base_url: str) -> Optional[str]:
    """
    Find the first ``<link type="application/rss+xml|atom+xml">`` in an HTML page.

    Relative hrefs are resolved against ``base_url``. Returns None when the page
    has no such link or cannot be parsed.
    """
    try:
        soup = BeautifulSoup(html or "", "html.parser")
        link = soup.find(
            "link",
            attrs={"type": lambda t: bool(t) and t.strip().lower() in FEED_MIMETYPES},
        )
    except Exception:
        logger.exception("Error parsing HTML for feed discovery (%s)", base_url)
        return None

    if link is None:
        return None
    href = (link.get("href") or "").strip()
    if not href:
        return None
    try:
        return urljoin(base_url, href)
    except ValueError:
        return href

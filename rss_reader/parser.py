from __future__ import annotations

import io
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import feedparser
from feedparser.exceptions import CharacterEncodingOverride, NonXMLContentType

from .exceptions import FeedDiscoveryError, ParseError
from .models import FeedFetchResult
from .normalizer import to_article

UNKNOWN_SOURCE = "Unknown source"
UNTITLED = "Untitled"

_HTML_PREFIXES = ("<!doctype html", "<html")
_FEED_MARKERS = ("<rss", "<feed", "<rdf:rdf")

# feedparser flags these as bozo even though the document itself is well-formed.
_BENIGN_BOZO = (CharacterEncodingOverride, NonXMLContentType)


def clean_text(raw: str) -> str:
    """Drop a leading byte-order mark and surrounding whitespace."""
    if raw.startswith("\ufeff"):
        raw = raw[1:]
    return raw.strip()


def looks_like_html(text: str) -> bool:
    return text.lower().startswith(_HTML_PREFIXES)


def looks_like_feed(text: str) -> bool:
    lower = text.lower()
    return any(m in lower for m in _FEED_MARKERS)


def _first_str(entry: Dict[str, Any], *keys: str) -> str:
    for key in keys:
        val = entry.get(key)
        if isinstance(val, str) and val.strip():
            return val.strip()
    return ""


def _get_link(entry: Dict[str, Any]) -> str:
    link = _first_str(entry, "link")
    if link:
        return link
    for l in entry.get("links") or []:
        href = l.get("href") if isinstance(l, dict) else None
        if isinstance(href, str) and href.strip():
            return href.strip()
    return ""


def _get_content(entry: Dict[str, Any], encoded_content: bool = True) -> str:
    # feedparser puts both content:encoded and Atom <content> in entry.content;
    # only the former outranks the summary.
    if encoded_content:
        for c in entry.get("content") or []:
            value = c.get("value") if isinstance(c, dict) else None
            if isinstance(value, str) and value.strip():
                return value
    return _first_str(entry, "summary", "description")


def _get_thumbnail(entry: Dict[str, Any]) -> Optional[str]:
    for key in ("media_content", "media_thumbnail"):
        for m in entry.get(key) or []:
            url = m.get("url") if isinstance(m, dict) else None
            if isinstance(url, str) and url.strip():
                return url.strip()
    for enc in entry.get("enclosures") or []:
        if not isinstance(enc, dict):
            continue
        if (enc.get("type") or "").lower().startswith("image"):
            href = enc.get("href") or enc.get("url")
            if isinstance(href, str) and href.strip():
                return href.strip()
    return None


def parse_entry(entry: Dict[str, Any], *, encoded_content: bool = True) -> Dict[str, Any]:
    """
    Map a raw feed entry (from feedparser) to a dict with the fields Article needs.
    Fields: title, link, pub_date, content, author, thumbnail

    Every field is extracted independently; a missing field gets its default and
    never aborts the entry. Pass encoded_content=False for Atom entries so the
    summary is used instead of <content>.
    """
    pub_date = _first_str(entry, "published", "updated", "created")
    if not pub_date:
        pub_date = datetime.now(timezone.utc).isoformat()

    return {
        "title": _first_str(entry, "title") or UNTITLED,
        "link": _get_link(entry),
        "pub_date": pub_date,
        "content": _get_content(entry, encoded_content),
        "author": _first_str(entry, "author") or None,
        "thumbnail": _get_thumbnail(entry),
    }


def parse_feed(raw_text: str, feed_id: str, original_url: str) -> FeedFetchResult:
    """
    Parse RSS 2.0, Atom or RDF text into a FeedFetchResult, keeping document order.

    Raises FeedDiscoveryError when the text is an HTML page rather than a feed, and
    ParseError when it is malformed XML that does not look like HTML.
    """
    text = clean_text(raw_text)

    if looks_like_html(text) and not looks_like_feed(text):
        raise FeedDiscoveryError("Received HTML page instead of XML", text, original_url)

    # The text is already decoded; tell feedparser so it ignores the declared encoding.
    # Markup is kept as published: no sanitizing, no relative URI rewriting.
    parsed = feedparser.parse(
        io.BytesIO(text.encode("utf-8")),
        response_headers={"content-type": "application/xml; charset=utf-8"},
        sanitize_html=False,
        resolve_relative_uris=False,
    )

    exc = parsed.get("bozo_exception")
    if parsed.get("bozo") and exc is not None and not isinstance(exc, _BENIGN_BOZO):
        lower = text.lower()
        if "<html" in lower or "<body" in lower:
            raise FeedDiscoveryError("XML parsing failed, content looks like HTML", text, original_url)
        raise ParseError(f"XML parser error: {exc}")

    title = _first_str(parsed.get("feed") or {}, "title") or UNKNOWN_SOURCE
    encoded = not (parsed.get("version") or "").startswith("atom")
    articles = [
        to_article(parse_entry(e, encoded_content=encoded), feed_id)
        for e in parsed.get("entries") or []
    ]
    return FeedFetchResult(title=title, articles=articles)

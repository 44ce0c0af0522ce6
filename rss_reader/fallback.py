from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Dict, Optional

import aiohttp

from .config import ReaderOptions
from .exceptions import FallbackError
from .models import Article, FeedFetchResult
from .normalizer import make_snippet
from .parser import UNKNOWN_SOURCE, UNTITLED

logger = logging.getLogger(__name__)


def _str(val: Any) -> str:
    if isinstance(val, str):
        return val.strip()
    return ""


def _map_item(item: Any, feed_id: str) -> Article:
    """Map one loosely-typed converter item to an Article; every field is optional."""
    if not isinstance(item, dict):
        item = {}
    content = _str(item.get("content")) or _str(item.get("description"))
    snippet_src = _str(item.get("description")) or content

    enclosure = item.get("enclosure")
    thumbnail = _str(item.get("thumbnail"))
    if not thumbnail and isinstance(enclosure, dict):
        thumbnail = _str(enclosure.get("link"))

    return Article(
        id=str(uuid.uuid4()),
        feed_id=feed_id,
        title=_str(item.get("title")) or UNTITLED,
        link=_str(item.get("link")),
        pub_date=_str(item.get("pubDate")),
        content=content,
        content_snippet=make_snippet(snippet_src),
        author=_str(item.get("author")) or None,
        thumbnail=thumbnail or None,
    )


def map_response(data: Any, feed_id: str) -> FeedFetchResult:
    """
    Convert a converter JSON payload into a FeedFetchResult.

    Raises FallbackError unless the payload reports ``status == "ok"``.
    """
    if not isinstance(data, dict):
        raise FallbackError("Converter returned an unexpected payload")
    if data.get("status") != "ok":
        raise FallbackError(f"Converter failed: {data.get('message') or 'unknown error'}")

    feed: Dict[str, Any] = data.get("feed") if isinstance(data.get("feed"), dict) else {}
    items = data.get("items") if isinstance(data.get("items"), list) else []
    return FeedFetchResult(
        title=_str(feed.get("title")) or UNKNOWN_SOURCE,
        articles=[_map_item(it, feed_id) for it in items],
    )


async def fetch_via_converter(
    url: str,
    feed_id: str,
    *,
    session: aiohttp.ClientSession,
    options: Optional[ReaderOptions] = None,
) -> FeedFetchResult:
    """
    Last resort: let a remote feed-to-JSON service fetch and parse ``url``.

    Single request, no retry. Raises FallbackError on any failure.
    """
    options = options or ReaderOptions()
    try:
        async with session.get(options.converter_endpoint, params={"rss_url": url}) as resp:
            if not 200 <= resp.status < 300:
                raise FallbackError(f"Converter failed with status {resp.status}")
            data = await resp.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise FallbackError(f"Converter request failed: {str(e) or type(e).__name__}") from e
    except ValueError as e:
        raise FallbackError(f"Converter returned invalid JSON: {e}") from e

    return map_response(data, feed_id)

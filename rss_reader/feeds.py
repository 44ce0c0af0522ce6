from __future__ import annotations

import uuid
from typing import Dict, Iterator, List, Optional
from urllib.parse import urlparse

from .exceptions import DuplicateFeedError
from .models import Feed

DEFAULT_FEEDS: List[Feed] = [
    Feed(id="default-irozhlas", title="iRozhlas", url="https://www.irozhlas.cz/rss/irozhlas"),
    Feed(id="default-lupa", title="Lupa.cz", url="https://www.lupa.cz/rss/clanky/"),
    Feed(id="default-verge", title="The Verge", url="https://www.theverge.com/rss/index.xml"),
    Feed(id="default-cc", title="CzechCrunch", url="https://cc.cz/feed/"),
]


def normalize_feed_url(url: str) -> str:
    return url.strip().rstrip("/")


def new_feed(url: str, title: Optional[str] = None) -> Feed:
    """Create a feed with a fresh id; the host name stands in as title until the first fetch."""
    url = url.strip()
    return Feed(id=str(uuid.uuid4()), url=url, title=title or urlparse(url).netloc or url)


class FeedList:
    """In-memory, ordered registry of subscribed feeds."""

    def __init__(self, feeds: Optional[List[Feed]] = None) -> None:
        self._feeds: Dict[str, Feed] = {}
        for f in feeds if feeds is not None else DEFAULT_FEEDS:
            self._feeds[f.id] = Feed(id=f.id, url=f.url, title=f.title, icon=f.icon)

    def __iter__(self) -> Iterator[Feed]:
        return iter(list(self._feeds.values()))

    def __len__(self) -> int:
        return len(self._feeds)

    def get(self, feed_id: str) -> Optional[Feed]:
        return self._feeds.get(feed_id)

    def contains_url(self, url: str) -> bool:
        target = normalize_feed_url(url)
        return any(normalize_feed_url(f.url) == target for f in self._feeds.values())

    def add(self, url: str, title: Optional[str] = None) -> Feed:
        if self.contains_url(url):
            raise DuplicateFeedError(f"Feed already registered: {url}")
        feed = new_feed(url, title)
        self._feeds[feed.id] = feed
        return feed

    def remove(self, feed_id: str) -> Optional[Feed]:
        return self._feeds.pop(feed_id, None)

    def rename(self, feed_id: str, title: str) -> None:
        feed = self._feeds.get(feed_id)
        if feed is not None and title:
            feed.title = title

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Feed:
    """A subscribed source. ``title`` is replaced once the real feed title is known."""
    id: str
    url: str
    title: str
    icon: Optional[str] = None


@dataclass(frozen=True)
class Article:
    """
    Normalized article produced by every fetch strategy.

    ``link`` is the identity used for de-duplication; ``id`` is regenerated on every
    parse and must not be used to match articles across refreshes.
    """
    id: str
    feed_id: str
    title: str
    link: str
    pub_date: str
    content: str
    content_snippet: str
    author: Optional[str] = None
    thumbnail: Optional[str] = None


@dataclass(frozen=True)
class FeedFetchResult:
    title: str
    articles: List[Article] = field(default_factory=list)

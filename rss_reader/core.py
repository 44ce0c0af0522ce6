from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import AsyncIterator, Dict, Iterable, List, Optional

import aiohttp

from .config import ReaderOptions
from .dedup import merge_articles
from .discovery import discover_feed_url
from .exceptions import FeedDiscoveryError, ParseError, TransportError
from .fallback import fetch_via_converter
from .fetcher import fetch_raw_text
from .models import Article, Feed, FeedFetchResult
from .parser import parse_feed

logger = logging.getLogger(__name__)


class AttemptOutcome(Enum):
    OK = "ok"
    NEEDS_DISCOVERY = "needs_discovery"
    FAILED = "failed"


@dataclass(frozen=True)
class DirectAttempt:
    """Result of one relay fetch + parse, tagged by how it ended."""
    outcome: AttemptOutcome
    result: Optional[FeedFetchResult] = None
    html: str = ""
    error: Optional[Exception] = None


@dataclass
class FeedOutcome:
    feed: Feed
    result: Optional[FeedFetchResult] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


@dataclass
class BatchResult:
    outcomes: List[FeedOutcome] = field(default_factory=list)
    articles: List[Article] = field(default_factory=list)

    @property
    def failed(self) -> List[FeedOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def titles(self) -> Dict[str, str]:
        """Fetched titles keyed by feed id, only where they differ from the stored title."""
        return {
            o.feed.id: o.result.title
            for o in self.outcomes
            if o.result is not None and o.result.title != o.feed.title
        }


class FeedFetcher:
    """
    High-level API: fetch one or many feeds and return normalized articles.

    Per feed: relay fetch → parse → (HTML page: discover feed link and retry) →
    (anything else failed: remote converter fallback).
    """

    def __init__(
        self,
        options: Optional[ReaderOptions] = None,
        *,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.options = options or ReaderOptions()
        self._session = session

    @asynccontextmanager
    async def _open_session(self) -> AsyncIterator[aiohttp.ClientSession]:
        if self._session is not None:
            yield self._session
            return
        async with aiohttp.ClientSession() as session:
            yield session

    async def _attempt_direct(self, url: str, feed_id: str, session) -> DirectAttempt:
        try:
            text = await fetch_raw_text(url, session=session, options=self.options)
            return DirectAttempt(AttemptOutcome.OK, result=parse_feed(text, feed_id, url))
        except FeedDiscoveryError as e:
            return DirectAttempt(AttemptOutcome.NEEDS_DISCOVERY, html=e.html_content, error=e)
        except (TransportError, ParseError) as e:
            return DirectAttempt(AttemptOutcome.FAILED, error=e)

    async def _fetch_feed(self, url: str, feed_id: str, session) -> FeedFetchResult:
        current = url
        visited = {url}
        hops = 0

        while True:
            attempt = await self._attempt_direct(current, feed_id, session)
            if attempt.outcome is AttemptOutcome.OK:
                return attempt.result
            logger.warning("Primary fetch failed for %s: %s", current, attempt.error)

            if attempt.outcome is not AttemptOutcome.NEEDS_DISCOVERY:
                break
            if hops >= self.options.max_discovery_hops:
                break
            discovered = discover_feed_url(attempt.html, current)
            if not discovered or discovered in visited:
                break
            logger.info("Discovered feed URL: %s", discovered)
            visited.add(discovered)
            current = discovered
            hops += 1

        logger.warning("Attempting converter fallback for %s", current)
        return await fetch_via_converter(current, feed_id, session=session, options=self.options)

    async def fetch_feed(self, url: str, feed_id: str) -> FeedFetchResult:
        """
        Fetch a single feed.

        Raises FallbackError when every strategy failed; the message is the
        converter's, not the relay's.
        """
        async with self._open_session() as session:
            return await self._fetch_feed(url, feed_id, session)

    async def fetch_all(self, feeds: Iterable[Feed]) -> BatchResult:
        """
        Fetch many feeds concurrently.

        Failures on individual feeds are isolated and reported in the outcome list;
        they never abort the batch. Articles from successful feeds are merged by link.
        """
        feeds = list(feeds)
        async with self._open_session() as session:
            results = await asyncio.gather(
                *(self._fetch_feed(f.url, f.id, session) for f in feeds),
                return_exceptions=True,
            )

        batch = BatchResult()
        for feed, res in zip(feeds, results):
            if isinstance(res, BaseException):
                logger.error("Failed to fetch feed %s: %s", feed.url, res)
                batch.outcomes.append(FeedOutcome(feed, error=res))
            else:
                batch.outcomes.append(FeedOutcome(feed, result=res))
        batch.articles = merge_articles(*(o.result.articles for o in batch.outcomes if o.ok))
        return batch

    def fetch_all_sync(self, feeds: Iterable[Feed]) -> BatchResult:
        return asyncio.run(self.fetch_all(feeds))

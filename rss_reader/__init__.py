"""
rss_reader

Fetches RSS/Atom/RDF feeds through pass-through relays and returns normalized articles.

Core ideas:
- Input: a feed URL (or a web page that links to one) and a feed id
- Process: relay fetch → parse → (HTML page: discover feed link) → (failure: remote converter)
- Output: FeedFetchResult(title, articles)

Example
-------
from rss_reader import FeedFetcher
from rss_reader.feeds import DEFAULT_FEEDS

fetcher = FeedFetcher()
batch = fetcher.fetch_all_sync(DEFAULT_FEEDS)

for article in batch.articles:
    print(article.pub_date, article.title, article.link)
"""
from .models import Article, Feed, FeedFetchResult
from .config import ReaderOptions, Relay
from .core import FeedFetcher, BatchResult
from .exceptions import (
    RSSReaderError,
    TransportError,
    ParseError,
    FeedDiscoveryError,
    FallbackError,
    DuplicateFeedError,
)
from .summarizers import SummarizeOptions, summarize

__all__ = [
    "Article",
    "Feed",
    "FeedFetchResult",
    "ReaderOptions",
    "Relay",
    "FeedFetcher",
    "BatchResult",
    "RSSReaderError",
    "TransportError",
    "ParseError",
    "FeedDiscoveryError",
    "FallbackError",
    "DuplicateFeedError",
    "SummarizeOptions",
    "summarize",
]

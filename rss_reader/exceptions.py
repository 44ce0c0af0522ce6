from __future__ import annotations

from typing import List, Optional


class RSSReaderError(Exception):
    """Base class for every error raised by rss_reader."""


class TransportError(RSSReaderError):
    """Raised when no relay could deliver the requested URL."""

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])


class ParseError(RSSReaderError):
    """Raised when a response is neither a usable feed nor an HTML page."""


class FeedDiscoveryError(RSSReaderError):
    """
    Raised when the response is an HTML page instead of a feed.

    Carries the page so the caller can look for an embedded feed link.
    """

    def __init__(self, message: str, html_content: str, original_url: str) -> None:
        super().__init__(message)
        self.html_content = html_content
        self.original_url = original_url


class FallbackError(RSSReaderError):
    """Raised when the remote conversion service cannot deliver the feed."""


class DuplicateFeedError(RSSReaderError):
    """Raised when a feed URL is registered twice."""

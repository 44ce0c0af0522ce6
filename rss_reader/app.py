from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set, Tuple

from .models import Article


@dataclass
class ReaderState:
    """
    Application-level bookkeeping kept outside the fetch pipeline.

    - known_links: every link seen so far, used to tell which articles are new
    - visited_links: links the user opened (for "hide read")
    """
    known_links: Set[str] = field(default_factory=set)
    visited_links: Set[str] = field(default_factory=set)
    first_load: bool = True

    def new_articles(self, articles: Iterable[Article]) -> List[Article]:
        """
        Return articles whose link was not known yet and remember all links.

        The first refresh only seeds the known set and reports nothing.
        """
        articles = list(articles)
        fresh = [] if self.first_load else [a for a in articles if a.link not in self.known_links]
        self.known_links.update(a.link for a in articles)
        self.first_load = False
        return fresh

    def mark_visited(self, link: str) -> None:
        self.visited_links.add(link)

    def clear_visited(self) -> None:
        self.visited_links.clear()


def notification_text(new_items: List[Article]) -> Optional[Tuple[str, str]]:
    """(title, body) announcing new articles, or None when there is nothing new."""
    if not new_items:
        return None
    if len(new_items) == 1:
        return "New article", new_items[0].title
    return "New articles", f"{len(new_items)} new articles"

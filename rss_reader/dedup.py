from __future__ import annotations

from typing import Dict, Iterable, List

from .models import Article


def merge_articles(*lists: Iterable[Article]) -> List[Article]:
    """
    Merge article lists, keeping one article per link.

    A later occurrence replaces an earlier one (the freshest fetch wins) but keeps the
    position where the link was first seen.
    """
    by_link: Dict[str, Article] = {}
    for articles in lists:
        for it in articles:
            by_link[it.link] = it
    return list(by_link.values())

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Iterable, List, Optional, Set
import time

from feedparser.datetimes import _parse_date

from .models import Article


def matches_keywords(article: Article, query: str) -> bool:
    """True when every whitespace-separated term of ``query`` occurs in the title or snippet."""
    terms = query.lower().split()
    if not terms:
        return True
    haystack = f"{article.title} {article.content_snippet}".lower()
    return all(t in haystack for t in terms)


def filter_articles(
    articles: Iterable[Article],
    *,
    query: str = "",
    visited: Optional[Set[str]] = None,
    hide_read: bool = False,
) -> List[Article]:
    out = []
    for a in articles:
        if not matches_keywords(a, query):
            continue
        if hide_read and visited and a.link in visited:
            continue
        out.append(a)
    return out


def _aware(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_pub_date(value: str) -> Optional[datetime]:
    """
    Best-effort conversion of a feed date string to an aware UTC-or-offset datetime.
    Tries RFC 822 → ISO 8601 → feedparser's date handlers; None if all fail.
    """
    s = (value or "").strip()
    if not s:
        return None
    try:
        return _aware(parsedate_to_datetime(s))
    except (TypeError, ValueError, IndexError):
        pass
    try:
        return _aware(datetime.fromisoformat(s.replace("Z", "+00:00")))
    except ValueError:
        pass
    try:
        parsed = _parse_date(s)
    except (TypeError, ValueError, OverflowError):
        return None
    if isinstance(parsed, time.struct_time):
        return datetime(*parsed[:6], tzinfo=timezone.utc)
    return None


def sort_newest_first(articles: Iterable[Article]) -> List[Article]:
    """Sort by publication date, newest first; undated articles go last in their original order."""
    dated = []
    undated = []
    for a in articles:
        dt = parse_pub_date(a.pub_date)
        if dt is None:
            undated.append(a)
        else:
            dated.append((dt, a))
    dated.sort(key=lambda x: x[0], reverse=True)
    return [a for _, a in dated] + undated

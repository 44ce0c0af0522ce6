from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from typing import List, Optional

from dotenv import load_dotenv

from .config import ReaderOptions
from .core import FeedFetcher
from .feeds import DEFAULT_FEEDS, FeedList
from .filters import filter_articles, sort_newest_first
from .summarizers import SummarizeOptions, summarize_articles


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rss-reader", description="Fetch RSS/Atom feeds and print normalized articles.")
    p.add_argument("urls", nargs="*", help="Feed or site URLs (defaults to the built-in feed list)")
    p.add_argument("--query", default="", help="Only show articles containing all of these words")
    p.add_argument("--limit", type=int, default=20, help="Maximum number of articles to print (0 = all)")
    p.add_argument("--summarize", action="store_true", help="Add an AI summary to each printed article")
    p.add_argument("--provider", default="gemini", help="Summarization provider: gemini | openai")
    p.add_argument("--language", default=None, help="Language hint for summaries")
    p.add_argument("--json", action="store_true", help="Print articles as JSON lines")
    p.add_argument("--log-level", default=os.getenv("RSS_READER_LOG_LEVEL", "WARNING"))
    return p


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    )

    if args.urls:
        feeds = FeedList([])
        for url in args.urls:
            if not feeds.contains_url(url):
                feeds.add(url)
    else:
        feeds = FeedList(DEFAULT_FEEDS)

    fetcher = FeedFetcher(ReaderOptions.from_env())
    batch = fetcher.fetch_all_sync(feeds)

    for feed_id, title in batch.titles.items():
        feeds.rename(feed_id, title)
    for o in batch.failed:
        print(f"Failed to fetch {o.feed.url}: {o.error}", file=sys.stderr)

    articles = sort_newest_first(filter_articles(batch.articles, query=args.query))
    if args.limit and args.limit > 0:
        articles = articles[: args.limit]

    summaries = {}
    if args.summarize and articles:
        opts = SummarizeOptions(provider=args.provider, language=args.language)
        summaries = summarize_articles(articles, options=opts)

    for a in articles:
        feed = feeds.get(a.feed_id)
        source = feed.title if feed else "Unknown source"
        if args.json:
            row = asdict(a)
            row["source"] = source
            if a.id in summaries:
                row["summary"] = summaries[a.id]
            print(json.dumps(row, ensure_ascii=False))
            continue
        print(f"{a.title}\n  {source} - {a.pub_date}\n  {a.link}")
        if a.content_snippet:
            print(f"  {a.content_snippet}")
        if a.id in summaries:
            print("  " + summaries[a.id].replace("\n", "\n  "))
        print()

    return 0 if any(o.ok for o in batch.outcomes) else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

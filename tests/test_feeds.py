"""Tests for the feed registry and application state."""

import pytest

from rss_reader.app import ReaderState, notification_text
from rss_reader.exceptions import DuplicateFeedError
from rss_reader.feeds import DEFAULT_FEEDS, FeedList, new_feed, normalize_feed_url
from rss_reader.models import Article


def _article(link, title="t"):
    return Article(id=link, feed_id="f", title=title, link=link, pub_date="", content="", content_snippet="")


class TestFeedList:

    def test_starts_with_defaults(self):
        feeds = FeedList()

        assert [f.id for f in feeds] == [f.id for f in DEFAULT_FEEDS]

    def test_defaults_are_not_shared(self):
        feeds = FeedList()
        feeds.rename("default-verge", "Changed")

        assert DEFAULT_FEEDS[2].title == "The Verge"

    def test_add_rejects_trailing_slash_duplicate(self):
        feeds = FeedList([])
        feeds.add("https://cc.cz/feed/")

        with pytest.raises(DuplicateFeedError):
            feeds.add("https://cc.cz/feed")

    def test_add_uses_host_as_placeholder_title(self):
        feed = FeedList([]).add("https://blog.example.com/rss")

        assert feed.title == "blog.example.com"
        assert feed.id

    def test_remove_and_rename(self):
        feeds = FeedList([])
        feed = feeds.add("https://example.com/rss")
        feeds.rename(feed.id, "Example")

        assert feeds.get(feed.id).title == "Example"
        assert feeds.remove(feed.id) is feed
        assert len(feeds) == 0

    def test_new_feed_ids_are_unique(self):
        assert new_feed("https://a.test").id != new_feed("https://a.test").id

    def test_normalize_feed_url(self):
        assert normalize_feed_url(" https://a.test/rss/ ") == "https://a.test/rss"


class TestReaderState:

    def test_first_load_reports_nothing(self):
        state = ReaderState()

        assert state.new_articles([_article("a")]) == []
        assert state.known_links == {"a"}

    def test_subsequent_loads_report_unseen_links(self):
        state = ReaderState()
        state.new_articles([_article("a")])

        fresh = state.new_articles([_article("a"), _article("b")])

        assert [a.link for a in fresh] == ["b"]
        assert state.new_articles([_article("b")]) == []

    def test_visited_history(self):
        state = ReaderState()
        state.mark_visited("a")
        assert "a" in state.visited_links
        state.clear_visited()
        assert state.visited_links == set()

    def test_notification_text(self):
        assert notification_text([]) is None
        assert notification_text([_article("a", "Big news")]) == ("New article", "Big news")
        assert notification_text([_article("a"), _article("b")]) == ("New articles", "2 new articles")

"""Tests for keyword filtering, read-hiding and date ordering."""

from datetime import datetime, timezone

import pytest

from rss_reader.filters import filter_articles, matches_keywords, parse_pub_date, sort_newest_first
from rss_reader.models import Article


def _article(link, title="", snippet="", pub_date=""):
    return Article(
        id=link, feed_id="f", title=title, link=link, pub_date=pub_date,
        content="", content_snippet=snippet,
    )


class TestKeywords:

    def test_all_terms_must_match_title_or_snippet(self):
        a = _article("1", title="Apple unveils new AI chip", snippet="The company said on Monday")

        assert matches_keywords(a, "apple monday")
        assert matches_keywords(a, "  AI  ")
        assert not matches_keywords(a, "apple google")

    def test_empty_query_matches_everything(self):
        assert matches_keywords(_article("1"), "")

    def test_filter_hides_read_only_when_asked(self):
        items = [_article("a", title="x"), _article("b", title="x")]

        assert [a.link for a in filter_articles(items, visited={"a"})] == ["a", "b"]
        assert [a.link for a in filter_articles(items, visited={"a"}, hide_read=True)] == ["b"]

    def test_filter_by_query(self):
        items = [_article("a", title="Tesla earnings"), _article("b", title="Weather")]

        assert [a.link for a in filter_articles(items, query="tesla")] == ["a"]


class TestDates:

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Mon, 01 Jan 2024 12:00:00 GMT", datetime(2024, 1, 1, 12, tzinfo=timezone.utc)),
            ("2024-02-01T10:00:00Z", datetime(2024, 2, 1, 10, tzinfo=timezone.utc)),
            ("2024-02-01", datetime(2024, 2, 1, tzinfo=timezone.utc)),
        ],
    )
    def test_parse_known_formats(self, value, expected):
        assert parse_pub_date(value) == expected

    @pytest.mark.parametrize("value", ["", "   ", "not a date", "sometime last week"])
    def test_unparseable(self, value):
        assert parse_pub_date(value) is None

    def test_sort_newest_first_with_undated_last(self):
        items = [
            _article("old", pub_date="Mon, 01 Jan 2024 12:00:00 GMT"),
            _article("undated", pub_date="whenever"),
            _article("vague", pub_date="sometime last week"),
            _article("new", pub_date="2024-03-01T00:00:00+01:00"),
        ]

        assert [a.link for a in sort_newest_first(items)] == ["new", "old", "undated", "vague"]

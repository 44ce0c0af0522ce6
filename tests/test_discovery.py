"""Tests for feed link discovery in HTML pages."""

import logging

from unittest.mock import patch

from rss_reader.discovery import discover_feed_url

from conftest import HTML_PAGE


class TestDiscoverFeedUrl:

    def test_relative_href_resolved_against_base(self):
        html = '<html><head><link type="application/rss+xml" href="/feed.xml"></head></html>'

        assert discover_feed_url(html, "https://example.com/page") == "https://example.com/feed.xml"

    def test_full_page_fixture(self):
        assert discover_feed_url(HTML_PAGE, "https://example.com/blog/post") == "https://example.com/feed.xml"

    def test_atom_link_and_absolute_href(self):
        html = '<link rel="alternate" type="application/atom+xml" href="https://feeds.example.net/atom">'

        assert discover_feed_url(html, "https://example.com/") == "https://feeds.example.net/atom"

    def test_first_match_wins(self):
        html = (
            '<link type="application/atom+xml" href="/atom.xml">'
            '<link type="application/rss+xml" href="/rss.xml">'
        )

        assert discover_feed_url(html, "https://example.com/") == "https://example.com/atom.xml"

    def test_ignores_other_link_types(self):
        html = '<link rel="stylesheet" type="text/css" href="/style.css"><link rel="icon" href="/favicon.ico">'

        assert discover_feed_url(html, "https://example.com/") is None

    def test_empty_href_is_not_a_result(self):
        assert discover_feed_url('<link type="application/rss+xml" href="">', "https://example.com/") is None

    def test_parse_failure_is_swallowed_and_logged(self, caplog):
        with patch("rss_reader.discovery.BeautifulSoup", side_effect=RuntimeError("boom")):
            with caplog.at_level(logging.ERROR, logger="rss_reader.discovery"):
                assert discover_feed_url("<html>", "https://example.com/") is None

        assert "feed discovery" in caplog.text

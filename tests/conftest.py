"""Shared fixtures: sample feeds and an in-memory stand-in for aiohttp.ClientSession."""

import pytest

from rss_reader.config import ReaderOptions, Relay


RSS_TWO_ITEMS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Example News</title>
    <link>https://example.com/</link>
    <description>All the news</description>
    <item>
      <title>First story</title>
      <link>https://example.com/a</link>
      <pubDate>Mon, 01 Jan 2024 12:00:00 GMT</pubDate>
      <description>&lt;p&gt;Hello &lt;b&gt;world&lt;/b&gt;&lt;/p&gt;</description>
    </item>
    <item>
      <title>Second story</title>
      <link>https://example.com/b</link>
      <pubDate>Tue, 02 Jan 2024 08:30:00 GMT</pubDate>
      <description>Plain second description</description>
    </item>
  </channel>
</rss>
"""

ATOM_FEED = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom Example</title>
  <id>urn:example:feed</id>
  <updated>2024-02-01T10:00:00Z</updated>
  <entry>
    <title>Atom entry</title>
    <id>urn:example:1</id>
    <link href="https://example.org/1"/>
    <updated>2024-02-01T10:00:00Z</updated>
    <summary>Short summary</summary>
    <author><name>Jane Doe</name></author>
  </entry>
</feed>
"""

HTML_PAGE = """<!DOCTYPE html>
<html>
  <head>
    <title>Example site</title>
    <link rel="stylesheet" href="/style.css">
    <link rel="alternate" type="application/rss+xml" title="RSS" href="/feed.xml">
  </head>
  <body><p>Welcome</p></body>
</html>
"""


class FakeResponse:
    def __init__(self, status=200, text="", json_data=None, exc=None):
        self.status = status
        self._text = text
        self._json = json_data
        self._exc = exc

    async def __aenter__(self):
        if self._exc is not None:
            raise self._exc
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def text(self, errors="strict"):
        return self._text

    async def json(self, content_type=None):
        if isinstance(self._json, Exception):
            raise self._json
        return self._json


class FakeSession:
    """
    Records every GET and answers through ``handler(url, kwargs) -> FakeResponse``.
    """

    def __init__(self, handler):
        self._handler = handler
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        return self._handler(url, kwargs)

    def urls(self, prefix=""):
        return [u for u, _ in self.calls if u.startswith(prefix)]


RELAY_A = "https://relay-a.test/"
RELAY_B = "https://relay-b.test/"
CONVERTER = "https://convert.test/api.json"


@pytest.fixture
def options():
    return ReaderOptions(
        relays=(
            Relay("relay-a", RELAY_A + "{url}"),
            Relay("relay-b", RELAY_B + "{url}"),
        ),
        converter_endpoint=CONVERTER,
    )

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Optional, Tuple
from urllib.parse import quote, urlparse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Relay:
    """
    A pass-through service that fetches an origin URL on our behalf.

    ``template`` accepts three placeholders:
    - ``{url}``: the origin URL as-is
    - ``{quoted}``: the origin URL percent-encoded for use in a query string
    - ``{ts}``: current time in milliseconds, useful as a cache-buster
    """
    name: str
    template: str

    def build(self, url: str) -> str:
        return self.template.format(
            url=url,
            quoted=quote(url, safe=""),
            ts=int(time.time() * 1000),
        )


DEFAULT_RELAYS: Tuple[Relay, ...] = (
    Relay("allorigins", "https://api.allorigins.win/raw?url={quoted}&t={ts}"),
    Relay("codetabs", "https://api.codetabs.com/v1/proxy?quest={quoted}"),
    Relay("yacdn", "https://yacdn.org/proxy/{url}"),
    Relay("thingproxy", "https://thingproxy.freeboard.io/fetch/{url}"),
)

DEFAULT_ACCEPT = "application/rss+xml, application/xml, text/xml, text/html, */*"
DEFAULT_USER_AGENT = "RSS-Reader-App/1.0"
DEFAULT_CONVERTER_ENDPOINT = "https://api.rss2json.com/v1/api.json"


@dataclass
class ReaderOptions:
    relays: Tuple[Relay, ...] = DEFAULT_RELAYS
    timeout_sec: float = 12.0
    user_agent: str = DEFAULT_USER_AGENT
    accept: str = DEFAULT_ACCEPT
    converter_endpoint: str = DEFAULT_CONVERTER_ENDPOINT
    max_discovery_hops: int = 1
    extra_headers: dict = field(default_factory=dict)

    @property
    def headers(self) -> dict:
        headers = {"Accept": self.accept, "User-Agent": self.user_agent}
        headers.update(self.extra_headers)
        return headers

    @classmethod
    def from_env(cls) -> "ReaderOptions":
        """Build options from ``RSS_READER_*`` environment variables, keeping defaults for anything unset."""
        opts = cls()
        raw_relays = os.getenv("RSS_READER_RELAYS")
        if raw_relays:
            relays = parse_relays(raw_relays)
            if relays:
                opts.relays = relays
            else:
                logger.warning("RSS_READER_RELAYS set but contained no usable templates; using defaults")
        opts.timeout_sec = _env_number("RSS_READER_TIMEOUT", opts.timeout_sec, float)
        opts.max_discovery_hops = _env_number("RSS_READER_DISCOVERY_HOPS", opts.max_discovery_hops, int)
        opts.user_agent = os.getenv("RSS_READER_USER_AGENT") or opts.user_agent
        opts.converter_endpoint = os.getenv("RSS_READER_CONVERTER_URL") or opts.converter_endpoint
        return opts


def parse_relays(raw: str) -> Tuple[Relay, ...]:
    """Parse a comma-separated list of relay templates; each relay is named after its host."""
    out = []
    for part in raw.split(","):
        template = part.strip()
        if not template:
            continue
        name = urlparse(template).netloc or template
        out.append(Relay(name, template))
    return tuple(out)


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %r", name, raw, default)
        return default

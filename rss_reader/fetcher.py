from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

import aiohttp

from .config import ReaderOptions
from .exceptions import TransportError

logger = logging.getLogger(__name__)


async def fetch_raw_text(
    url: str,
    *,
    session: aiohttp.ClientSession,
    options: Optional[ReaderOptions] = None,
) -> str:
    """
    Fetch the body of ``url`` through the configured relays, in order.

    Each relay gets one attempt bounded by ``options.timeout_sec``; a bad status, an
    empty body, a network error or a timeout moves on to the next relay immediately.

    Raises TransportError carrying the last relay's error once every relay has failed.
    """
    options = options or ReaderOptions()
    timeout = aiohttp.ClientTimeout(total=options.timeout_sec)
    errors: List[str] = []
    last_error: Optional[BaseException] = None

    for relay in options.relays:
        relay_url = relay.build(url)
        try:
            async with session.get(relay_url, headers=options.headers, timeout=timeout) as resp:
                if not 200 <= resp.status < 300:
                    raise TransportError(f"HTTP error! status: {resp.status}")
                text = await resp.text(errors="replace")
            if not text or not text.strip():
                raise TransportError("Empty response")
            return text
        except asyncio.TimeoutError as e:
            last_error = TransportError(f"Timed out after {options.timeout_sec:g}s")
            last_error.__cause__ = e
        except (aiohttp.ClientError, TransportError) as e:
            last_error = e
        msg = f"{relay.name}: {last_error}"
        errors.append(msg)
        logger.debug("Relay failed for %s (%s)", url, msg)

    if last_error is None:
        raise TransportError("Failed to fetch feed from all relays", errors)
    raise TransportError(str(last_error) or type(last_error).__name__, errors) from last_error

from __future__ import annotations

import logging
from typing import Any, Dict, List

import feedparser

from .exceptions import RSSFetchError

logger = logging.getLogger(__name__)


def fetch_feed_entries(url: str) -> List[Dict[str, Any]]:
    """
    Fetch a single feed URL and return its entries.

    Raises RSSFetchError on network/parse issues or when the feed is malformed (bozo)
    and yields no entries. A bozo feed that still carries entries is accepted; a
    well-formed feed with no entries returns an empty list.
    """
    try:
        feed = feedparser.parse(url)
    except Exception as e:  # pragma: no cover - surface as domain error
        raise RSSFetchError(f"Failed to fetch feed: {url} ({e})") from e

    entries = getattr(feed, "entries", None)
    if not isinstance(entries, list):
        entries = []

    if getattr(feed, "bozo", 0):
        # bozo_exception may exist; include a short message for diagnostics
        exc = getattr(feed, "bozo_exception", None)
        msg = f"Invalid RSS/Atom feed: {url}"
        if exc:
            msg += f" ({exc})"
        if not entries:
            raise RSSFetchError(msg)
        logger.warning("%s; continuing with %d entries", msg, len(entries))

    if not entries:
        logger.info("Feed has no entries: %s", url)
    return entries

from __future__ import annotations

from typing import Any, Dict

from .models import FeedItem
from .parser import DEFAULT_SECTION


def to_feed_item(entry: Dict[str, Any]) -> FeedItem:
    """
    Convert a parsed entry dict into a FeedItem.
    Requires:
    - link (non-empty)
    Optional:
    - title, excerpt, section, author, published, guid
    """
    link = entry.get("link") or ""
    if not link:
        raise ValueError("Entry lacks required field for FeedItem: link")

    return FeedItem(
        title=entry.get("title") or "",
        link=link,
        excerpt=entry.get("excerpt") or "",
        section=entry.get("section") or DEFAULT_SECTION,
        author=entry.get("author") or "",
        published=entry.get("published") or "",
        guid=entry.get("guid"),
    )

from __future__ import annotations

from typing import Iterable, List, Set

from .models import FeedItem


def _make_key(it: FeedItem) -> str:
    # Tracking parameters vary between syndications of the same story
    return (it.link or it.guid or it.title or "").split("?")[0]


def deduplicate(items: Iterable[FeedItem]) -> List[FeedItem]:
    """
    Remove duplicates by priority: link (query stripped) -> guid -> title.
    Keeps the first occurrence and preserves original order.
    """
    seen: Set[str] = set()
    out: List[FeedItem] = []
    for it in items:
        key = _make_key(it)
        if key in seen:
            continue
        seen.add(key)
        out.append(it)
    return out

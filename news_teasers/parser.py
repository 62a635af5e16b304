from __future__ import annotations

import calendar
import re
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from lxml import etree
from lxml import html as lxml_html

DEFAULT_SECTION = "Top"


def _to_datetime(entry: Dict[str, Any]) -> Optional[datetime]:
    """
    Convert feed entry date fields to timezone-aware UTC datetime.
    Priority: published_parsed -> updated_parsed -> created_parsed -> None.
    """
    for key in ("published_parsed", "updated_parsed", "created_parsed"):
        val = entry.get(key)
        if isinstance(val, time.struct_time):
            try:
                # feedparser normalizes *_parsed to UTC
                return datetime.fromtimestamp(calendar.timegm(val), tz=timezone.utc)
            except (OverflowError, ValueError):
                continue
    return None


def _published(entry: Dict[str, Any]) -> str:
    dt = _to_datetime(entry)
    if dt:
        return dt.isoformat()
    for key in ("published", "updated", "created"):
        s = entry.get(key)
        if isinstance(s, str) and s.strip():
            return s.strip()
    return ""


def _strip_html(s: str) -> str:
    if not s:
        return ""
    if "<" in s:
        try:
            s = lxml_html.fromstring(s).text_content()
        except (etree.ParserError, ValueError):
            pass
    return re.sub(r"\s+", " ", s).strip()


def _get_section(entry: Dict[str, Any]) -> str:
    # Prefer first tag term
    tags = entry.get("tags")
    if isinstance(tags, list) and tags:
        t0 = tags[0]
        if isinstance(t0, dict):
            term = t0.get("term")
            if isinstance(term, str) and term.strip():
                return term.strip()
    return DEFAULT_SECTION


def _get_author(entry: Dict[str, Any]) -> str:
    for key in ("author", "dc_creator", "creator"):
        v = entry.get(key)
        if isinstance(v, str) and v.strip():
            return v.strip()
    return ""


def parse_entry(entry: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map a raw feed entry (from feedparser) to a normalized dict with common fields.
    Fields: title, excerpt, link, section, author, published (str), guid
    """
    title = _strip_html((entry.get("title") or "").strip())
    excerpt = _strip_html(entry.get("summary") or entry.get("description") or "")
    link = (entry.get("link") or entry.get("feedburner_origlink") or "").strip()

    # Prefer entry id/guid if present
    guid = None
    for k in ("id", "guid"):
        v = entry.get(k)
        if isinstance(v, str) and v.strip():
            guid = v.strip()
            break

    return {
        "title": title,
        "excerpt": excerpt,
        "link": link,
        "section": _get_section(entry),
        "author": _get_author(entry),
        "published": _published(entry),
        "guid": guid,
    }

"""
Hook extraction: pull reusable narrative hooks out of article text.

Every function here is pure. The same (text, title) always yields the same
HookSet, so teaser selection downstream is reproducible.

Pattern contracts
-----------------
actors       1-4 capitalized tokens separated by spaces/tabs (never across
             newlines or punctuation), title first, then body. See clean_actor.
numbers      currency ($1,200 / $3.5 / $314 million / $5M), percentages
             (12% / 4.5 percent) and thousands-grouped numbers (12,500).
quotes       text between curly double quotes, 10-140 characters.
dates        month name or abbreviation, optional day, year and clock time.
impacts      a consequence word followed by up to 60 characters of the same sentence.
comparisons  a comparison connective followed by up to 60 characters of the same sentence.
"""
from __future__ import annotations

import re
from typing import Iterable, List, Optional, Pattern

from .models import HookSet

MAX_NUMBERS = 4
MAX_QUOTES = 2
MAX_DATES = 2
MAX_ACTORS = 4
MAX_IMPACTS = 2
MAX_COMPARISONS = 1

INTERROGATIVES = {"what", "which", "who", "whom", "whose", "where", "when", "why", "how"}

_MONTHS = (
    "January|February|March|April|May|June|July|August|September|October|November|December"
    "|Jan|Feb|Mar|Apr|Jun|Jul|Aug|Sept|Sep|Oct|Nov|Dec"
)
_WEEKDAYS = (
    "Monday|Tuesday|Wednesday|Thursday|Friday|Saturday|Sunday"
    "|Mon|Tue|Tues|Wed|Thu|Thur|Thurs|Fri|Sat|Sun"
)

_TOKEN = r"[A-Z][\w'’&-]*"
_ACTOR = re.compile(rf"\b{_TOKEN}(?:[ \t]+{_TOKEN}){{0,3}}")

_NUMBER = re.compile(
    r"\$\s?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?(?:\s?(?:million|billion|trillion|thousand)\b|[MBK]\b)?"
    r"|\b\d+(?:\.\d+)?\s?(?:%|percent\b)"
    r"|\b\d{1,3}(?:,\d{3})+(?:\.\d+)?\b"
)

_QUOTE = re.compile(r"“([^“”]{10,140})”")

_DATE = re.compile(
    rf"\b(?:{_MONTHS})\b\.?"
    r"(?:\s+\d{1,2}(?:st|nd|rd|th)?\b)?"
    r"(?:,?\s+\d{4}\b)?"
    r"(?:,?\s+(?:at\s+)?\d{1,2}(?::\d{2})?\s?(?:a\.m\.|p\.m\.|am\b|pm\b|AM\b|PM\b))?"
)

_IMPACT = re.compile(
    r"\b(?:could|would|faces|penalty|ban|cost|delay|risk|cut|tax|fee|fine|closure|layoffs|suspend|probation)\b"
    r"[^.!?;\n]{0,60}",
    re.IGNORECASE,
)

_COMPARISON = re.compile(
    r"(?:\bvs\.|\bcompared with\b|\bmore than\b|\bless than\b|\btops\b|\blags\b|\branks\b)"
    r"[^.!?;\n]{0,60}",
    re.IGNORECASE,
)

# UI chrome, credits and bylines that look like proper nouns
STOP_ACTORS = {
    "advertisement", "read more", "sign up", "subscribe", "newsletter", "share",
    "comments", "click here", "related", "most popular", "trending", "photo", "photos",
    "video", "watch", "listen", "getty images", "associated press", "ap photo",
    "file photo", "updated", "published", "staff", "contributor", "correspondent",
    "copyright", "all rights reserved", "terms of use", "privacy policy", "menu",
    "search", "home", "top", "news", "breaking news", "skip", "close", "log in",
}

# Sentence-initial words that get capitalized without being names
_LEADING_FILLERS = {
    "the", "a", "an", "this", "that", "these", "those", "they", "there", "their",
    "here", "but", "and", "or", "so", "still", "however", "after", "before", "while",
    "during", "according", "in", "on", "at", "for", "if", "as", "it", "its", "he",
    "she", "we", "our", "his", "her", "some", "many", "most", "other", "both", "all",
}

_BYLINE = re.compile(r"^(?:By|Photo|Credit|Image|Video|Updated|Published)\b")
_DATE_WORDS = re.compile(rf"^(?:(?:{_MONTHS}|{_WEEKDAYS})\.?\s*)+$")
_CLOCK = re.compile(r"^\d{1,2}(?::\d{2})?\s*(?:a\.?m\.?|p\.?m\.?)?$|^(?:AM|PM|Noon|Midnight)$", re.IGNORECASE)
_YEAR = re.compile(r"^\d{4}$")
_POSSESSIVE = re.compile(r"['’]s$")
_EDGE_PUNCT = " \t'’\"“”-&"


def _squash(s: str) -> str:
    return re.sub(r"\s+", " ", s).strip()


def _collect(pattern: Pattern[str], text: str, cap: int, group: int = 0) -> tuple:
    out: List[str] = []
    for m in pattern.finditer(text):
        value = _squash(m.group(group)).rstrip(",:")
        if value and value not in out:
            out.append(value)
            if len(out) >= cap:
                break
    return tuple(out)


def clean_actor(candidate: str) -> Optional[str]:
    """
    Return a usable actor name, or None when the candidate is noise.

    Leading articles and sentence fillers are dropped. A leading interrogative
    is dropped and the remainder re-tested. Rejected: stop-list boilerplate and
    bylines, dates, clock times, bare years, and single tokens under 4 chars.
    """
    s = _squash(candidate).strip(_EDGE_PUNCT)
    s = _POSSESSIVE.sub("", s)
    while s:
        first, _, rest = s.partition(" ")
        if first.lower() in _LEADING_FILLERS:
            s = rest.strip(_EDGE_PUNCT)
            continue
        if first.lower() in INTERROGATIVES:
            return clean_actor(rest) if rest else None
        break
    if not s:
        return None
    if s.lower() in STOP_ACTORS or _BYLINE.match(s):
        return None
    if _DATE_WORDS.match(s) or _DATE.fullmatch(s):
        return None
    if _CLOCK.match(s) or _YEAR.match(s):
        return None
    if " " not in s and len(s) < 4:
        return None
    return s


def extract_actors(text: str, title: str = "", cap: int = MAX_ACTORS) -> tuple:
    """Cleaned actors, title-derived first, deduplicated case-insensitively."""
    out: List[str] = []
    seen = set()
    for source in (title, text):
        for m in _ACTOR.finditer(source or ""):
            actor = clean_actor(m.group(0))
            if not actor or actor.lower() in seen:
                continue
            seen.add(actor.lower())
            out.append(actor)
            if len(out) >= cap:
                return tuple(out)
    return tuple(out)


def _join(parts: Iterable[str]) -> str:
    return "\n".join(p for p in parts if p)


def extract(text: str, title: str = "") -> HookSet:
    """Mine a HookSet from article text and its title (title has priority)."""
    combined = _join((title, text))
    return HookSet(
        numbers=_collect(_NUMBER, combined, MAX_NUMBERS),
        quotes=_collect(_QUOTE, combined, MAX_QUOTES, group=1),
        dates=_collect(_DATE, combined, MAX_DATES),
        actors=extract_actors(text or "", title or ""),
        impacts=_collect(_IMPACT, combined, MAX_IMPACTS),
        comparisons=_collect(_COMPARISON, combined, MAX_COMPARISONS),
    )

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class Domain(str, Enum):
    SPORTS = "sports"
    ENTERTAINMENT = "entertainment"
    GOV = "gov"
    COURTS = "courts"
    REALESTATE = "realestate"
    GENERAL = "general"


@dataclass(frozen=True)
class FeedItem:
    """One deduplicated entry from the source feed."""
    title: str
    link: str
    excerpt: str = ""
    section: str = "Top"
    author: str = ""
    published: str = ""
    guid: Optional[str] = None


@dataclass(frozen=True)
class Article:
    """
    A feed item joined with its extracted body text and lead image.

    Created once per feed item and read-only downstream. `text` may be empty
    when extraction failed; use `article_text` for the degraded fallback.
    """
    title: str
    link: str
    text: str
    section: str
    published: str
    image: Optional[str] = None
    author: str = ""
    excerpt: str = ""

    @property
    def article_text(self) -> str:
        return self.text or self.excerpt or self.title


@dataclass(frozen=True)
class HookSet:
    """
    Narrative hooks mined from one article.

    Dates are kept for the move decision only and never rendered.
    """
    numbers: Tuple[str, ...] = ()
    quotes: Tuple[str, ...] = ()
    dates: Tuple[str, ...] = ()
    actors: Tuple[str, ...] = ()
    impacts: Tuple[str, ...] = ()
    comparisons: Tuple[str, ...] = ()

    def rotated(self) -> "HookSet":
        """Drop the leading actor and number so a retry renders differently."""
        return HookSet(
            numbers=self.numbers[1:],
            quotes=self.quotes,
            dates=self.dates,
            actors=self.actors[1:],
            impacts=self.impacts,
            comparisons=self.comparisons,
        )


@dataclass(frozen=True)
class Draft:
    move: str
    text: str


@dataclass(frozen=True)
class Teaser:
    text: str
    domain: Domain
    move: str
    opener: str


@dataclass(frozen=True)
class Result:
    """
    Final per-article record written to the artifact.

    WARNING: the field set is the artifact contract read by the static page.
    """
    title: str
    url: str
    author: str
    section: str
    published: str
    image: Optional[str]
    bullets: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "author": self.author,
            "section": self.section,
            "published": self.published,
            "image": self.image,
            "bullets": list(self.bullets),
        }

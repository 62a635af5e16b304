"""
Repetition guard for the curiosity bullet.

Per candidate:

    DRAFTED -> needs_rewrite? -> REWRITTEN -> over first-word cap? -> FORCED_FALLBACK -> ACCEPTED

Every article ends with an accepted teaser. When no draft clears the filters
a neutral sentence from NEUTRAL_FALLBACKS is used; when even those are
exhausted the guard fails open and repeats an opener.
"""
from __future__ import annotations

import logging
import random
import re
from typing import Iterable, List, Optional, Sequence

from .history import HistoryState, first_word, opener
from .hooks import INTERROGATIVES
from .models import Domain, Draft, Teaser

logger = logging.getLogger(__name__)

DEFAULT_FIRST_WORD_CAP = 2
FALLBACK_MOVE = "fallback"

# Matched anywhere, case-insensitively
BANNED_PHRASES = (
    "discover", "find out", "learn", "see how", "see why", "read how", "read why",
    "here’s how", "here's how", "here’s why", "here's why",
    "this is why", "this is how",
    "unveil", "reveal", "uncover",
)

NEUTRAL_FALLBACKS = (
    "A key detail in the full story changes the stakes.",
    "One figure in the report carries most of the weight.",
    "The next formal step is already on the calendar.",
    "Two possible outcomes point in very different directions.",
    "Much depends on a decision still ahead.",
    "Critics and supporters read the same facts differently.",
    "Timing matters here more than the headline suggests.",
    "Local impact varies widely from one neighborhood to the next.",
    "Behind the headline sits a quieter shift worth noting.",
    "Every side points to the same figure for support.",
    "Context from earlier reporting sharpens the picture.",
    "Fine print in the proposal does much of the work.",
    "Nearby communities are watching the outcome closely.",
    "Money sits at the center of the debate.",
    "Pressure is building on the people making the call.",
    "Small wording changes carry large consequences here.",
    "Supporters point to a specific precedent.",
    "Opponents have zeroed in on one provision.",
    "Experts flagged the same concern in earlier reviews.",
    "History offers a useful parallel to this moment.",
    "Residents will feel the change before the paperwork settles.",
    "Just one clause separates the competing readings.",
    "Several names in the story carry more weight than their titles.",
    "Plenty still hinges on who acts first.",
)

_LEADING_WORD = re.compile(r"^\W*([A-Za-z]+)")


def is_question(text: str) -> bool:
    """True for a literal '?' or a sentence-initial interrogative word."""
    if "?" in (text or ""):
        return True
    m = _LEADING_WORD.match(text or "")
    return bool(m) and m.group(1).lower() in INTERROGATIVES


def contains_banned(text: str, phrases: Sequence[str] = BANNED_PHRASES) -> bool:
    lower = (text or "").lower()
    return any(p in lower for p in phrases)


class RepetitionGuard:
    """
    Accepts exactly one teaser per article against a shared HistoryState.

    `rng` drives the fallback shuffle; pass a seeded random.Random for
    reproducible runs.
    """

    def __init__(
        self,
        history: HistoryState,
        *,
        first_word_cap: int = DEFAULT_FIRST_WORD_CAP,
        rng: Optional[random.Random] = None,
        fallbacks: Sequence[str] = NEUTRAL_FALLBACKS,
    ) -> None:
        self.history = history
        self.first_word_cap = max(1, int(first_word_cap))
        self.rng = rng or random.Random()
        self.fallbacks = tuple(fallbacks)

    def needs_rewrite(self, text: str) -> bool:
        if not text or not text.strip():
            return True
        if contains_banned(text) or is_question(text):
            return True
        return self.history.has_opener(opener(text))

    def over_first_word_cap(self, text: str) -> bool:
        return self.history.first_word_count(first_word(text)) >= self.first_word_cap

    def fallback(self) -> str:
        """
        Pick a neutral sentence, preferring one that clears both the opener
        history and the first-word cap. Once the fresh openers run out an
        opener may repeat, but the first-word cap still holds while any
        sentence is under it.
        """
        pool: List[str] = list(self.fallbacks)
        self.rng.shuffle(pool)
        fresh = [s for s in pool if not self.history.has_opener(opener(s))]
        for s in fresh:
            if not self.over_first_word_cap(s):
                return s
        under_cap = [s for s in pool if not self.over_first_word_cap(s)]
        if under_cap:
            logger.warning("Fallback openers exhausted; repeating an opener")
            return under_cap[0]
        logger.warning("Fallback pool exhausted under the first-word cap")
        return fresh[0] if fresh else pool[0]

    def _accept(self, text: str, domain: Domain, move: str) -> Teaser:
        op = self.history.record(text)
        return Teaser(text=text, domain=domain, move=move, opener=op)

    def finalize(self, candidates: Iterable[Draft], domain: Domain) -> Teaser:
        """Run the drafts through the state machine and accept one teaser."""
        for draft in candidates:
            if self.needs_rewrite(draft.text):
                continue
            if self.over_first_word_cap(draft.text):
                logger.info("First word %r at cap; forcing fallback", first_word(draft.text))
                break
            return self._accept(draft.text, domain, draft.move)
        else:
            logger.info("No %s draft cleared the filters; using fallback", domain.value)
        return self._accept(self.fallback(), domain, FALLBACK_MOVE)

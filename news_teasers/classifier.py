from __future__ import annotations

import re
from typing import Iterable, Optional, Pattern, Sequence, Tuple

from .models import Domain


def _rule(*keywords: str) -> Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(keywords) + r")\b", re.IGNORECASE)


# Evaluated in order; first match wins. GENERAL is the default.
DOMAIN_RULES: Sequence[Tuple[Domain, Pattern[str]]] = (
    (Domain.SPORTS, _rule(
        r"sports?", "celtics", "bruins", r"red sox", "patriots", r"pats", "nba", "nfl",
        "nhl", "mlb", "mls", "playoffs?", "quarterback", "pitcher", "inning", "touchdown",
        "head coach", "roster", r"free agen(?:t|cy)", r"draft picks?", "postseason",
        r"world series", r"super bowl", r"stanley cup", "marathon",
    )),
    (Domain.ENTERTAINMENT, _rule(
        "entertainment", r"arts?", "movies?", "films?", "tv", "television", "netflix",
        "hbo", "streaming", r"concerts?", r"albums?", "actor", "actress", r"celebrit(?:y|ies)",
        "broadway", r"box office", "premiere", r"festivals?", r"musicians?", "comedian",
        r"restaurants?", "chef",
    )),
    (Domain.GOV, _rule(
        r"politics", r"city council", "councilors?", "mayor", "governor", "legislature",
        r"state house", r"select ?board", "selectmen", r"town meeting", r"ordinance",
        "budget", r"elections?", r"ballot", "senators?", "congress", r"lawmakers?",
        "mbta", r"school committee", r"zoning board", "referendum",
    )),
    (Domain.COURTS, _rule(
        r"courts?", "judge", "jury", r"trials?", r"lawsuits?", "sued", "sentenced",
        "indicted", r"indictment", r"pleaded", r"plea", "arraigned", "arraignment",
        r"prosecutors?", "verdict", r"district attorney", r"defendants?", r"convicted",
    )),
    (Domain.REALESTATE, _rule(
        r"real estate", r"real-estate", "realtor", r"listings?", r"condos?",
        "mortgage", r"home sales?", r"housing market", r"square feet", r"sq\.? ?ft",
        r"bedrooms?", r"asking price", r"sold for", r"for sale", r"rents?", "landlord",
    )),
)


def _matches(pattern: Pattern[str], haystacks: Iterable[str]) -> bool:
    return any(pattern.search(h) for h in haystacks if h)


def classify(text: str, section: Optional[str] = None) -> Domain:
    """
    Assign exactly one Domain from the section label and article text.

    Plain membership test against DOMAIN_RULES in fixed priority order
    (sports, entertainment, gov, courts, realestate); no scoring.
    """
    haystacks = ((section or "").strip(), text or "")
    for domain, pattern in DOMAIN_RULES:
        if _matches(pattern, haystacks):
            return domain
    return Domain.GENERAL

"""
Move selection and teaser rendering.

A move is a named rhetorical template. Each domain lists its moves in
priority order (DECISION_TABLE); a move is eligible when the hook type it
needs (MOVE_REQUIREMENTS) is present. The first eligible move is the draft,
later ones are the rewrite alternatives handed to the RepetitionGuard.

Templates are declarative or imperative only. Dates are never rendered.
"""
from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Set, Tuple

from .models import Domain, Draft, HookSet

TEMPLATE_VERSION = 3

# Hook attribute a move needs; None means always eligible
MOVE_REQUIREMENTS: Dict[str, Optional[str]] = {
    "statistic": "numbers",
    "board": "numbers",
    "quote": "quotes",
    "comparison": "comparisons",
    "impact": "impacts",
    "spotlight": "actors",
    "next_step": "actors",
    "docket": "dates",
    "map": None,
    "analysis": None,
    "recap": None,
}

DECISION_TABLE: Dict[Domain, Tuple[str, ...]] = {
    Domain.SPORTS: ("statistic", "quote", "analysis", "recap"),
    Domain.ENTERTAINMENT: ("quote", "spotlight", "statistic", "analysis"),
    Domain.GOV: ("impact", "board", "quote", "next_step", "map", "analysis"),
    Domain.COURTS: ("docket", "quote", "impact", "spotlight", "analysis"),
    Domain.REALESTATE: ("statistic", "comparison", "map", "analysis"),
    Domain.GENERAL: ("statistic", "quote", "impact", "comparison", "spotlight", "analysis"),
}

TEMPLATES: Dict[Tuple[Domain, str], str] = {
    (Domain.SPORTS, "statistic"): "The {number} figure changes how the season looks from here.",
    (Domain.SPORTS, "quote"): "One remark from {actor} sets the tone in the locker room.",
    (Domain.SPORTS, "analysis"): "{actor} faces a stretch that could define the season.",
    (Domain.SPORTS, "recap"): "Momentum has shifted in ways the box score does not show.",

    (Domain.ENTERTAINMENT, "quote"): "A candid remark from {actor} is drawing plenty of attention.",
    (Domain.ENTERTAINMENT, "spotlight"): "{actor} is at the center of a story with more layers than the headline.",
    (Domain.ENTERTAINMENT, "statistic"): "The {number} mark stands out among the numbers behind the project.",
    (Domain.ENTERTAINMENT, "analysis"): "Behind the scenes, one decision shaped how this came together.",

    (Domain.GOV, "impact"): "The practical effect on residents comes down to one provision.",
    (Domain.GOV, "board"): "A {number} line item carries most of the weight in the plan.",
    (Domain.GOV, "quote"): "One remark from {actor} captures the split among officials.",
    (Domain.GOV, "next_step"): "{actor} now heads to the next formal step in the process.",
    (Domain.GOV, "map"): "A closer look at the map shows where pressure is building.",
    (Domain.GOV, "analysis"): "Officials still have one key decision left to make.",

    (Domain.COURTS, "docket"): "The next court date sets the pace for everything that follows.",
    (Domain.COURTS, "quote"): "A line from the court record frames the argument ahead.",
    (Domain.COURTS, "impact"): "The potential penalty for {actor} turns on a single finding.",
    (Domain.COURTS, "spotlight"): "{actor} remains central to how the case unfolds.",
    (Domain.COURTS, "analysis"): "Lawyers on both sides are focused on one clause.",

    (Domain.REALESTATE, "statistic"): "The {number} price tag tells only part of the story.",
    (Domain.REALESTATE, "comparison"): "Side by side with nearby sales, the numbers stand out.",
    (Domain.REALESTATE, "map"): "Location explains much of the appeal, street by street.",
    (Domain.REALESTATE, "analysis"): "One feature of the property sets it apart from the rest.",

    (Domain.GENERAL, "statistic"): "The {number} figure carries more weight than it first appears.",
    (Domain.GENERAL, "quote"): "One quote from {actor} sharpens the stakes.",
    (Domain.GENERAL, "impact"): "The consequences land first on the people closest to it.",
    (Domain.GENERAL, "comparison"): "A comparison in the report puts the change in context.",
    (Domain.GENERAL, "spotlight"): "{actor} plays a bigger role here than the headline lets on.",
    (Domain.GENERAL, "analysis"): "A key detail deeper in the report shifts the picture.",
}

# Subject used when no actor survived cleaning
DEFAULT_SUBJECTS: Dict[Domain, str] = {
    Domain.SPORTS: "the team",
    Domain.ENTERTAINMENT: "the production",
    Domain.GOV: "the proposal",
    Domain.COURTS: "the defendant",
    Domain.REALESTATE: "the property",
    Domain.GENERAL: "the central figure",
}


def is_eligible(move: str, hooks: HookSet) -> bool:
    attr = MOVE_REQUIREMENTS[move]
    return attr is None or bool(getattr(hooks, attr))


def eligible_moves(hooks: HookSet, domain: Domain) -> List[str]:
    return [m for m in DECISION_TABLE[domain] if is_eligible(m, hooks)]


def select_move(hooks: HookSet, domain: Domain) -> str:
    """First eligible move in the domain's priority order."""
    return eligible_moves(hooks, domain)[0]


def best_actor(hooks: HookSet, title: str = "") -> Optional[str]:
    """First actor named in the title, else the first actor found at all."""
    lowered = (title or "").lower()
    for actor in hooks.actors:
        if actor.lower() in lowered:
            return actor
    return hooks.actors[0] if hooks.actors else None


def _sentence_case(s: str) -> str:
    return s[:1].upper() + s[1:] if s else s


def render(domain: Domain, move: str, hooks: HookSet, title: str = "") -> str:
    template = TEMPLATES[(domain, move)]
    actor = best_actor(hooks, title) or DEFAULT_SUBJECTS[domain]
    number = hooks.numbers[0] if hooks.numbers else ""
    return _sentence_case(template.format(actor=actor, number=number))


def compose(hooks: HookSet, domain: Domain, title: str = "") -> str:
    """Render the draft teaser for an article."""
    return render(domain, select_move(hooks, domain), hooks, title)


def drafts(hooks: HookSet, domain: Domain, title: str = "") -> Iterator[Draft]:
    """
    Yield candidate teasers in preference order, without duplicates.

    The first is what compose() returns. Each eligible move is tried with the
    full hook set and then with the leading actor/number rotated out.
    """
    seen: Set[str] = set()
    for move in eligible_moves(hooks, domain):
        for variant in (hooks, hooks.rotated()):
            if not is_eligible(move, variant):
                continue
            text = render(domain, move, variant, title)
            if text in seen:
                continue
            seen.add(text)
            yield Draft(move=move, text=text)

"""Tests for news_teasers.composer module."""

import pytest

from news_teasers.composer import (
    DECISION_TABLE,
    MOVE_REQUIREMENTS,
    TEMPLATES,
    best_actor,
    compose,
    drafts,
    render,
    select_move,
)
from news_teasers.guard import contains_banned, is_question
from news_teasers.models import Domain, HookSet

FULL_HOOKS = HookSet(
    numbers=("$5 million",),
    quotes=("we are not done yet with this",),
    dates=("Sept. 18",),
    actors=("Jordan Smith",),
    impacts=("could delay the project",),
    comparisons=("more than last year",),
)


class TestSelectMove:
    def test_sports_number_gives_statistic(self) -> None:
        assert select_move(HookSet(numbers=("$314 million",), quotes=("a quote of some length",)), Domain.SPORTS) == "statistic"

    def test_sports_quote_without_number(self) -> None:
        assert select_move(HookSet(quotes=("a quote of some length",)), Domain.SPORTS) == "quote"

    def test_sports_falls_back_to_analysis(self) -> None:
        assert select_move(HookSet(actors=("Jayson Tatum",)), Domain.SPORTS) == "analysis"

    def test_gov_without_hooks_uses_map(self) -> None:
        assert select_move(HookSet(), Domain.GOV) == "map"

    def test_gov_impact_first(self) -> None:
        assert select_move(FULL_HOOKS, Domain.GOV) == "impact"

    def test_courts_date_gives_docket(self) -> None:
        assert select_move(HookSet(dates=("March 3",)), Domain.COURTS) == "docket"


class TestCompose:
    def test_statistic_references_figure(self) -> None:
        text = compose(HookSet(numbers=("$314 million",)), Domain.SPORTS, "Celtics sign Jayson Tatum")
        assert text == "The $314 million figure changes how the season looks from here."

    def test_default_subject_is_sentence_cased(self) -> None:
        assert compose(HookSet(), Domain.SPORTS) == "The team faces a stretch that could define the season."

    def test_actor_substituted(self) -> None:
        text = compose(HookSet(actors=("Maura Healey",)), Domain.GENERAL)
        assert text.startswith("Maura Healey ")

    def test_dates_never_rendered(self) -> None:
        hooks = HookSet(dates=("Sept. 18, 2025",), actors=("Jordan Smith",))
        for domain in Domain:
            for draft in drafts(hooks, domain):
                assert "Sept" not in draft.text
                assert "2025" not in draft.text


class TestBestActor:
    def test_prefers_actor_named_in_title(self) -> None:
        hooks = HookSet(actors=("Bill Belichick", "Drake Maye"))
        assert best_actor(hooks, "Drake Maye starts Sunday") == "Drake Maye"

    def test_first_actor_otherwise(self) -> None:
        assert best_actor(HookSet(actors=("Bill Belichick", "Drake Maye")), "") == "Bill Belichick"

    def test_none_without_actors(self) -> None:
        assert best_actor(HookSet(), "Anything") is None


class TestDrafts:
    def test_first_draft_matches_compose(self) -> None:
        first = next(drafts(FULL_HOOKS, Domain.GENERAL))
        assert first.text == compose(FULL_HOOKS, Domain.GENERAL)

    def test_no_duplicate_texts(self) -> None:
        texts = [d.text for d in drafts(FULL_HOOKS, Domain.GENERAL)]
        assert len(texts) == len(set(texts))

    def test_gov_without_hooks_offers_alternate_move(self) -> None:
        moves = [d.move for d in drafts(HookSet(), Domain.GOV)]
        assert moves == ["map", "analysis"]

    def test_rotation_drops_leading_number(self) -> None:
        hooks = HookSet(numbers=("$5 million", "40%"))
        texts = [d.text for d in drafts(hooks, Domain.SPORTS)]
        assert texts[0].startswith("The $5 million figure")
        assert texts[1].startswith("The 40% figure")


class TestTemplateTable:
    def test_every_decision_has_a_template(self) -> None:
        for domain, moves in DECISION_TABLE.items():
            for move in moves:
                assert (domain, move) in TEMPLATES
                assert move in MOVE_REQUIREMENTS

    def test_every_domain_ends_with_unconditional_move(self) -> None:
        for domain, moves in DECISION_TABLE.items():
            assert MOVE_REQUIREMENTS[moves[-1]] is None

    @pytest.mark.parametrize("key", sorted(TEMPLATES, key=lambda k: (k[0].value, k[1])))
    def test_templates_are_declarative_and_clean(self, key) -> None:
        domain, move = key
        text = render(domain, move, FULL_HOOKS)
        assert not is_question(text)
        assert not contains_banned(text)
        assert "{" not in text

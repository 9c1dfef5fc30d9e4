"""Tests for the CardScheduler domain service and pool filtering."""

import random
from collections import Counter
from datetime import timedelta

import pytest

from flipdeck.domain.learning.services.card_scheduler import (
    CardScheduler,
    compute_filtered_pool,
    interval_in_whole_days,
)
from flipdeck.domain.learning.value_objects.rating import Rating
from tests.factories import NOW, ScriptedRandom, make_card


class TestComputeFilteredPool:
    def test_empty_selection_includes_every_lesson(self) -> None:
        cards = [make_card("Math"), make_card("History"), make_card("Art")]
        assert compute_filtered_pool(cards, set(), False, NOW) == cards

    def test_selection_excludes_other_lessons(self) -> None:
        cards = [make_card("Math"), make_card("History"), make_card("Math"), make_card("Art")]

        pool = compute_filtered_pool(cards, {"Math", "Art"}, False, NOW)

        assert [card.lesson for card in pool] == ["Math", "Math", "Art"]
        assert all(card.lesson in {"Math", "Art"} for card in pool)

    def test_due_only_keeps_cards_due_at_or_before_now(self) -> None:
        overdue = make_card(next_due=NOW - timedelta(hours=1))
        exactly_now = make_card(next_due=NOW)
        future = make_card(next_due=NOW + timedelta(seconds=1))

        pool = compute_filtered_pool([overdue, future, exactly_now], set(), True, NOW)

        assert pool == [overdue, exactly_now]
        assert all(card.next_due <= NOW for card in pool)

    def test_preserves_deck_order(self) -> None:
        cards = [make_card(f"L{i % 2}", question=str(i)) for i in range(6)]
        pool = compute_filtered_pool(cards, {"L1"}, True, NOW)
        assert [card.question for card in pool] == ["1", "3", "5"]

    def test_unknown_lesson_gives_empty_pool(self) -> None:
        assert compute_filtered_pool([make_card("Math")], {"Biology"}, False, NOW) == []


class TestChoose:
    def test_empty_candidates_raise(self) -> None:
        with pytest.raises(ValueError):
            CardScheduler(random.Random(0)).choose([])

    def test_single_candidate_is_chosen_without_drawing(self) -> None:
        rng = ScriptedRandom([])
        card = make_card(last_rating=Rating.GREAT)

        assert CardScheduler(rng).choose([card]) is card
        assert rng.calls == []

    @pytest.mark.parametrize(
        ("draw", "expected_index"),
        [(0, 0), (4, 0), (5, 1), (6, 1), (7, 2)],
    )
    def test_cumulative_weight_walk(self, draw: int, expected_index: int) -> None:
        """Weights 5, 2, 1: draws 0-4 hit weak, 5-6 good, 7 great."""
        candidates = [
            make_card(last_rating=Rating.WEAK),
            make_card(last_rating=Rating.GOOD),
            make_card(last_rating=Rating.GREAT),
        ]
        rng = ScriptedRandom([draw])

        chosen = CardScheduler(rng).choose(candidates)

        assert chosen is candidates[expected_index]
        assert rng.calls == [8]

    def test_frequencies_converge_to_weights(self) -> None:
        candidates = [
            make_card(last_rating=Rating.WEAK),
            make_card(last_rating=Rating.GOOD),
            make_card(last_rating=Rating.GREAT),
            make_card(last_rating=None),
        ]
        scheduler = CardScheduler(random.Random(42))
        trials = 40_000

        counts = Counter(scheduler.choose(candidates).id for _ in range(trials))

        total_weight = 5 + 2 + 1 + 2
        for card, weight in zip(candidates, [5, 2, 1, 2], strict=True):
            assert counts[card.id] / trials == pytest.approx(weight / total_weight, abs=0.015)


class TestNextDue:
    def test_whole_day_intervals(self) -> None:
        assert interval_in_whole_days(Rating.WEAK) == 1
        assert interval_in_whole_days(Rating.GOOD) == 2
        assert interval_in_whole_days(Rating.GREAT) == 5

    @pytest.mark.parametrize(
        ("rating", "days"),
        [(Rating.WEAK, 1), (Rating.GOOD, 2), (Rating.GREAT, 5)],
    )
    def test_next_due_adds_rounded_interval(self, rating: Rating, days: int) -> None:
        scheduler = CardScheduler(random.Random(0))
        assert scheduler.next_due(rating, NOW) == NOW + timedelta(days=days)

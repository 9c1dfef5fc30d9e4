"""
Domain service for choosing and rescheduling cards.

Scheduling uses a fixed three-tier table instead of a spaced-repetition
algorithm: the last rating decides both how likely a card is to be drawn
and how many days pass before it is due again.

This is a pure domain service with no infrastructure dependencies; the
random source is injected so sessions can be replayed in tests.
"""

import random
from collections.abc import Collection, Sequence
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from flipdeck.domain.learning.entities.card import Card
from flipdeck.domain.learning.value_objects.rating import (
    Rating,
    review_interval_days,
    selection_weight,
)


def compute_filtered_pool(
    cards: Sequence[Card],
    selected_lessons: Collection[str],
    show_only_due_cards: bool,
    now: datetime,
) -> list[Card]:
    """
    Return the cards eligible for selection, in deck order.

    Args:
        cards: The whole deck
        selected_lessons: Lessons to include; empty means every lesson
        show_only_due_cards: Restrict to cards with next_due <= now
        now: Reference time for the due check

    Returns:
        The filtered cards, in the order they appear in the deck
    """
    pool = [card for card in cards if not selected_lessons or card.lesson in selected_lessons]
    if show_only_due_cards:
        return [card for card in pool if card.is_due(now)]
    return pool


def interval_in_whole_days(rating: Rating) -> int:
    """Round the rating's interval to the nearest day, halves rounding up."""
    days = Decimal(str(review_interval_days(rating)))
    return int(days.quantize(Decimal(1), rounding=ROUND_HALF_UP))


class CardScheduler:
    """
    Weighted card selection and due-date calculation.

    Weights: weak 5, good 2, great 1, unrated 2. Intervals: weak half a
    day (rounded to one), good two days, great five days.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def choose(self, candidates: Sequence[Card]) -> Card:
        """
        Draw one card, biased towards cards that were rated weak.

        Args:
            candidates: Non-empty list of cards to choose from

        Returns:
            The chosen card

        Raises:
            ValueError: If candidates is empty
        """
        if not candidates:
            raise ValueError("Cannot choose from an empty candidate list")
        if len(candidates) == 1:
            return candidates[0]

        weighted = [(card, selection_weight(card.last_rating)) for card in candidates]
        total = sum(weight for _, weight in weighted)
        if total <= 0:
            return candidates[0]

        r = self.rng.randrange(total)
        cumulative = 0
        for card, weight in weighted:
            cumulative += weight
            if r < cumulative:
                return card
        return candidates[-1]

    def next_due(self, rating: Rating, now: datetime) -> datetime:
        """Return when a card rated ``rating`` at ``now`` is due again."""
        return now + timedelta(days=interval_in_whole_days(rating))

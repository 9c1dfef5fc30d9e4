"""
Review rating and the fixed scheduling table derived from it.

A card is either unrated (``None``) or carries the last self-assessed
recall quality. Weights and intervals are resolved through total lookup
functions so every case, unrated included, has an explicit value.
"""

from enum import StrEnum
from typing import Final


class Rating(StrEnum):
    """Self-assessed recall quality for a reviewed card."""

    WEAK = "weak"
    GOOD = "good"
    GREAT = "great"


MIN_SELECTION_WEIGHT: Final[int] = 1

SELECTION_WEIGHTS: Final[dict[Rating | None, int]] = {
    Rating.WEAK: 5,
    Rating.GOOD: 2,
    Rating.GREAT: 1,
    None: 2,  # unrated cards count as "good"
}

REVIEW_INTERVAL_DAYS: Final[dict[Rating, float]] = {
    Rating.WEAK: 0.5,
    Rating.GOOD: 2.0,
    Rating.GREAT: 5.0,
}


def selection_weight(rating: Rating | None) -> int:
    """Return the draw weight for a card whose last rating is ``rating``."""
    return max(SELECTION_WEIGHTS[rating], MIN_SELECTION_WEIGHT)


def review_interval_days(rating: Rating) -> float:
    """Return the unrounded review interval, in days, for ``rating``."""
    return REVIEW_INTERVAL_DAYS[rating]

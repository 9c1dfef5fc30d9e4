"""
Deck statistics aggregation domain service.

Statistics are rebuilt from the whole deck on every call; decks hold tens
to a few thousand cards, so there is no incremental bookkeeping.
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from flipdeck.domain.learning.entities.card import Card


@dataclass(frozen=True)
class DeckStats:
    """Summary counts for a deck."""

    total: int = 0
    by_lesson: dict[str, int] = field(default_factory=dict)
    weak: int = 0
    good: int = 0
    great: int = 0
    shown: int = 0
    accuracy: float = 0.0


def compute_deck_stats(cards: Iterable[Card]) -> DeckStats:
    """
    Aggregate review counters over the full deck.

    Accuracy is (good + great) / shown, or 0.0 before any review. It is
    left unrounded; formatting belongs to whoever displays it.
    """
    cards = list(cards)
    by_lesson = Counter(card.lesson for card in cards)
    weak = sum(card.times_weak for card in cards)
    good = sum(card.times_good for card in cards)
    great = sum(card.times_great for card in cards)
    shown = sum(card.times_shown for card in cards)

    return DeckStats(
        total=len(cards),
        by_lesson=dict(by_lesson),
        weak=weak,
        good=good,
        great=great,
        shown=shown,
        accuracy=(good + great) / shown if shown > 0 else 0.0,
    )

from .card_scheduler import CardScheduler, compute_filtered_pool
from .deck_statistics import DeckStats, compute_deck_stats

__all__ = [
    "CardScheduler",
    "DeckStats",
    "compute_deck_stats",
    "compute_filtered_pool",
]

"""Common value objects shared across all domain modules."""

from .ids import CardId

__all__ = [
    "CardId",
]

from .card import EPOCH, Card

__all__ = ["EPOCH", "Card"]

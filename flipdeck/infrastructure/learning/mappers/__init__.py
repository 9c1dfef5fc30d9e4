from .card_mapper import CardMapper

__all__ = ["CardMapper"]

from .deck_schemas import CardRecord, DeckFile

__all__ = ["CardRecord", "DeckFile"]

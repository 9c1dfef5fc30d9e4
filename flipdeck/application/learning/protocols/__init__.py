from .deck_repository import DeckRepositoryProtocol

__all__ = ["DeckRepositoryProtocol"]

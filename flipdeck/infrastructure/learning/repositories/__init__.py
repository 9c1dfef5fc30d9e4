from .deck_repository import JsonDeckRepository

__all__ = ["JsonDeckRepository"]

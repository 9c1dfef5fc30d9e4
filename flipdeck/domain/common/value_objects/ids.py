from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class CardId(EntityId):
    """Strongly-typed card identifier."""

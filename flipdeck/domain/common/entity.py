"""
Base class for Entities.

Entities have a distinct identity that runs through time and different
states. Two entities are equal if they share the same identity, whatever
their attributes.

Example:
    @dataclass
    class Card(Entity[CardId]):
        id: CardId
        question: str

        def rename(self, question: str) -> None:
            self.question = question
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, Self, TypeVar
from uuid import UUID, uuid4

from .value_object import ValueObject


@dataclass(frozen=True)
class EntityId(ValueObject):
    """
    Base class for strongly-typed, UUID-based entity identifiers.

    Wrapping the UUID keeps ids of different entities from being mixed up
    and gives every id the same string form on the wire.
    """

    value: UUID

    def __post_init__(self) -> None:
        if not isinstance(self.value, UUID):
            raise TypeError(f"{self.__class__.__name__} must wrap a UUID")

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def generate(cls) -> Self:
        """Create a fresh random identifier."""
        return cls(uuid4())

    @classmethod
    def parse(cls, raw: str | UUID) -> Self:
        """Build an identifier from its string form (or an existing UUID)."""
        if isinstance(raw, UUID):
            return cls(raw)
        return cls(UUID(raw))

    def to_primitive(self) -> str:
        return str(self.value)


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """
    Base class for Entities in the domain model.

    Entities are:
    - Defined by identity (not attributes)
    - Mutable (state can change over time)

    Subclasses must have an 'id' attribute of type IdType.
    """

    id: IdType

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id})"

"""Events published by a study session to its subscribers."""

from dataclasses import dataclass, field

from flipdeck.domain.common.domain_event import DomainEvent
from flipdeck.domain.common.value_objects import CardId
from flipdeck.domain.learning.value_objects.rating import Rating


@dataclass(frozen=True)
class SessionEvent(DomainEvent):
    """Base class for everything a study session reports."""


@dataclass(frozen=True)
class CardPresented(SessionEvent):
    card_id: CardId
    cycle_wrapped: bool = False


@dataclass(frozen=True)
class CycleCompleted(SessionEvent):
    """Every card of the pool has been shown once; a new cycle starts."""

    pool_size: int


@dataclass(frozen=True)
class CardRated(SessionEvent):
    card_id: CardId
    rating: Rating


@dataclass(frozen=True)
class CardAdded(SessionEvent):
    card_id: CardId


@dataclass(frozen=True)
class CardUpdated(SessionEvent):
    card_id: CardId


@dataclass(frozen=True)
class CardDeleted(SessionEvent):
    card_id: CardId


@dataclass(frozen=True)
class DeckReplaced(SessionEvent):
    """The whole deck was swapped (CSV import, JSON import, restore, reseed)."""

    source: str
    card_count: int


@dataclass(frozen=True)
class FilterChanged(SessionEvent):
    selected_lessons: frozenset[str] = field(default_factory=frozenset)
    show_only_due_cards: bool = True

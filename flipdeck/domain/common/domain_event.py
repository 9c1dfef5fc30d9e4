"""
Domain event base class.

Events are frozen records of something that already happened to the deck
or the session, named in the past tense (CardRated, DeckReplaced). The
study session hands them to its subscribers.
"""

from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4


def _primitive(value: object) -> object:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, frozenset | set):
        return sorted(_primitive(item) for item in value)
    if hasattr(value, "to_primitive"):
        return _primitive(value.to_primitive())
    return value


@dataclass(frozen=True)
class DomainEvent:
    event_id: UUID = field(default_factory=uuid4, kw_only=True)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC), kw_only=True)

    @property
    def event_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, object]:
        """Flatten the event into JSON-friendly values, keyed by field name."""
        payload = {f.name: _primitive(getattr(self, f.name)) for f in fields(self)}
        payload["event_type"] = self.event_type
        return payload

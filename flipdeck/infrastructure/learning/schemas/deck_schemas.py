"""Pydantic schemas for the persisted deck file."""

from datetime import UTC, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel

from flipdeck.domain.learning.entities.card import EPOCH
from flipdeck.domain.learning.value_objects.rating import Rating


class CardRecord(BaseModel):
    """One card as stored in ``deck.json`` (camelCase keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID
    lesson: str
    question: str
    answer: str
    times_shown: int = Field(0, ge=0, description="Number of reviews")
    times_good: int = Field(0, ge=0, description="Reviews rated good")
    times_great: int = Field(0, ge=0, description="Reviews rated great")
    times_weak: int = Field(0, ge=0, description="Reviews rated weak")
    last_rating: Rating | None = Field(None, description="Most recent rating, null if unrated")
    next_due: datetime = Field(EPOCH, description="ISO-8601 timestamp or epoch seconds")

    @field_validator("next_due", mode="after")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @field_serializer("next_due")
    def serialize_next_due(self, value: datetime) -> str:
        return value.isoformat()


class DeckFile(BaseModel):
    """Top-level deck document: ``{"cards": [...]}``."""

    cards: list[CardRecord] = Field(default_factory=list, description="Cards in deck order")

    @model_validator(mode="after")
    def check_unique_ids(self) -> "DeckFile":
        """No two cards may share an id."""
        seen: set[UUID] = set()
        for card in self.cards:
            if card.id in seen:
                msg = f"duplicate card id {card.id}"
                raise ValueError(msg)
            seen.add(card.id)
        return self

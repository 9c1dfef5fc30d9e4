"""Mapper for Card persistence record ↔ Domain conversion."""

from flipdeck.domain.common.value_objects import CardId
from flipdeck.domain.learning.entities.card import Card
from flipdeck.infrastructure.learning.schemas.deck_schemas import CardRecord, DeckFile


class CardMapper:
    """Mapper for Card record ↔ Domain conversion."""

    def to_domain(self, record: CardRecord) -> Card:
        """Convert a persisted record to a domain entity."""
        return Card.create_with_id(
            id=CardId(record.id),
            lesson=record.lesson,
            question=record.question,
            answer=record.answer,
            times_shown=record.times_shown,
            times_good=record.times_good,
            times_great=record.times_great,
            times_weak=record.times_weak,
            last_rating=record.last_rating,
            next_due=record.next_due,
        )

    def to_record(self, card: Card) -> CardRecord:
        """Convert a domain entity to its persisted record."""
        return CardRecord(
            id=card.id.value,
            lesson=card.lesson,
            question=card.question,
            answer=card.answer,
            times_shown=card.times_shown,
            times_good=card.times_good,
            times_great=card.times_great,
            times_weak=card.times_weak,
            last_rating=card.last_rating,
            next_due=card.next_due,
        )

    def deck_to_domain(self, deck_file: DeckFile) -> list[Card]:
        return [self.to_domain(record) for record in deck_file.cards]

    def deck_to_file(self, cards: list[Card]) -> DeckFile:
        return DeckFile(cards=[self.to_record(card) for card in cards])

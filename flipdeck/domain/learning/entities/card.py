"""
Card entity for flashcard study sessions.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Final

from flipdeck.domain.common.entity import Entity
from flipdeck.domain.common.exceptions import ValidationError
from flipdeck.domain.common.value_objects import CardId
from flipdeck.domain.learning.value_objects.rating import Rating

EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=UTC)

_COUNTER_FIELDS: Final[tuple[str, ...]] = (
    "times_shown",
    "times_good",
    "times_great",
    "times_weak",
)


@dataclass(eq=False)
class Card(Entity[CardId]):
    """
    A question/answer pair grouped under a lesson, with its review history.

    Business Rules:
    - Review counters are never negative and only grow
    - times_shown equals the sum of the three rating counters after a rating
    - A new card is due immediately (next_due is the epoch)
    - The id never changes
    """

    id: CardId
    lesson: str
    question: str
    answer: str
    times_shown: int = 0
    times_good: int = 0
    times_great: int = 0
    times_weak: int = 0
    last_rating: Rating | None = None
    next_due: datetime = EPOCH

    def __post_init__(self) -> None:
        """Validate invariants."""
        for name in _COUNTER_FIELDS:
            value = getattr(self, name)
            if value < 0:
                raise ValidationError("Review counters cannot be negative", field=name, value=value)
        if self.next_due.tzinfo is None:
            self.next_due = self.next_due.replace(tzinfo=UTC)

    def is_due(self, now: datetime) -> bool:
        """Whether the card is scheduled at or before ``now``."""
        return self.next_due <= now

    def record_rating(self, rating: Rating, next_due: datetime) -> None:
        """
        Record the outcome of one review.

        Args:
            rating: The self-assessed recall quality
            next_due: When the card should come up again
        """
        self.times_shown += 1
        if rating is Rating.WEAK:
            self.times_weak += 1
        elif rating is Rating.GOOD:
            self.times_good += 1
        else:
            self.times_great += 1
        self.last_rating = rating
        self.next_due = next_due

    def update_content(self, lesson: str, question: str, answer: str) -> None:
        """
        Replace the card's text, keeping its review history.

        The lesson label is trimmed; question and answer are kept verbatim.
        """
        self.lesson = lesson.strip()
        self.question = question
        self.answer = answer

    def matches(self, text: str) -> bool:
        """Case-insensitive substring match over lesson, question and answer."""
        needle = text.casefold()
        return any(
            needle in field.casefold() for field in (self.lesson, self.question, self.answer)
        )

    @classmethod
    def create(cls, lesson: str, question: str, answer: str) -> "Card":
        """Create a new, unrated card with a fresh id."""
        return cls(
            id=CardId.generate(),
            lesson=lesson.strip(),
            question=question,
            answer=answer,
        )

    @classmethod
    def create_with_id(
        cls,
        id: CardId,
        lesson: str,
        question: str,
        answer: str,
        times_shown: int,
        times_good: int,
        times_great: int,
        times_weak: int,
        last_rating: Rating | None,
        next_due: datetime,
    ) -> "Card":
        """Reconstitute a card from persistence."""
        return cls(
            id=id,
            lesson=lesson,
            question=question,
            answer=answer,
            times_shown=times_shown,
            times_good=times_good,
            times_great=times_great,
            times_weak=times_weak,
            last_rating=last_rating,
            next_due=next_due,
        )

"""Builders shared by the test suite."""

import random
from datetime import UTC, datetime

from flipdeck.domain.common.value_objects import CardId
from flipdeck.domain.learning.entities.card import EPOCH, Card
from flipdeck.domain.learning.value_objects.rating import Rating

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


def make_card(
    lesson: str = "Math",
    question: str = "2+2?",
    answer: str = "4",
    *,
    last_rating: Rating | None = None,
    next_due: datetime = EPOCH,
    times_good: int = 0,
    times_great: int = 0,
    times_weak: int = 0,
) -> Card:
    return Card.create_with_id(
        id=CardId.generate(),
        lesson=lesson,
        question=question,
        answer=answer,
        times_shown=times_good + times_great + times_weak,
        times_good=times_good,
        times_great=times_great,
        times_weak=times_weak,
        last_rating=last_rating,
        next_due=next_due,
    )


class ScriptedRandom(random.Random):
    """Random source whose randrange returns queued values."""

    def __init__(self, values: list[int]) -> None:
        super().__init__(0)
        self.values = list(values)
        self.calls: list[int] = []

    def randrange(self, *args: object, **kwargs: object) -> int:  # type: ignore[override]
        self.calls.append(args[0])  # type: ignore[arg-type]
        return self.values.pop(0)

"""DTOs for the study session engine."""

from dataclasses import dataclass, field, replace

from flipdeck.domain.common.value_objects import CardId
from flipdeck.domain.learning.entities.card import Card


@dataclass
class SessionState:
    """
    Process-local state of a study session. Never persisted.

    Owned and mutated by StudySessionUseCase only; readers get a snapshot of
    it through the use case's properties and events.
    """

    selected_lessons: set[str] = field(default_factory=set)
    show_only_due_cards: bool = True
    current_card: Card | None = None
    show_answers: bool = False
    seen_in_cycle: set[CardId] = field(default_factory=set)
    due_cards_seen: set[CardId] = field(default_factory=set)
    cycle_completed: bool = False

    def snapshot(self) -> "SessionState":
        """Copy with its own sets, so readers cannot change the session."""
        return replace(
            self,
            selected_lessons=set(self.selected_lessons),
            seen_in_cycle=set(self.seen_in_cycle),
            due_cards_seen=set(self.due_cards_seen),
        )


@dataclass(frozen=True)
class SessionProgress:
    """Progress through the current pool, recomputed on every read."""

    current: int
    total: int

    @property
    def fraction(self) -> float:
        """Share of the pool already shown, clamped to 1.0."""
        if self.total <= 0:
            return 0.0
        return min(self.current / self.total, 1.0)

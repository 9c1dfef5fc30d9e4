"""Use case for running a flashcard study session."""

from collections.abc import Callable, Iterable
from datetime import UTC, datetime

import structlog

from flipdeck.application.learning.protocols.deck_repository import DeckRepositoryProtocol
from flipdeck.application.learning.use_cases.dtos.backup_dtos import BackupInfo
from flipdeck.application.learning.use_cases.dtos.study_session_dtos import (
    SessionProgress,
    SessionState,
)
from flipdeck.domain.common.value_objects import CardId
from flipdeck.domain.learning.entities.card import Card
from flipdeck.domain.learning.events import (
    CardAdded,
    CardDeleted,
    CardPresented,
    CardRated,
    CardUpdated,
    CycleCompleted,
    DeckReplaced,
    FilterChanged,
    SessionEvent,
)
from flipdeck.domain.learning.services.card_scheduler import CardScheduler, compute_filtered_pool
from flipdeck.domain.learning.services.deck_statistics import DeckStats, compute_deck_stats
from flipdeck.domain.learning.value_objects.rating import Rating

logger = structlog.get_logger(__name__)

SessionListener = Callable[[SessionEvent], None]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class StudySessionUseCase:
    """
    The study session engine.

    Owns the in-memory deck and the session state. Every mutating call
    leaves the current card, the statistics and the persisted deck
    consistent with each other before it returns, and reports what happened
    to subscribers as SessionEvents.

    Calls must come from a single control flow; there is no locking.
    """

    def __init__(
        self,
        deck_repository: DeckRepositoryProtocol,
        scheduler: CardScheduler,
        csv_parser: Callable[[str | bytes], list[Card]],
        sample_deck_factory: Callable[[], list[Card]],
        clock: Callable[[], datetime] = _utc_now,
        show_only_due_cards: bool = True,
    ) -> None:
        """Initialize use case with its collaborators."""
        self.deck_repository = deck_repository
        self.scheduler = scheduler
        self.csv_parser = csv_parser
        self.sample_deck_factory = sample_deck_factory
        self.clock = clock

        self._cards: list[Card] = []
        self._state = SessionState(show_only_due_cards=show_only_due_cards)
        self._stats = DeckStats()
        self._listeners: list[SessionListener] = []

    # Read-only views

    @property
    def cards(self) -> list[Card]:
        return list(self._cards)

    @property
    def state(self) -> SessionState:
        return self._state.snapshot()

    @property
    def stats(self) -> DeckStats:
        return self._stats

    @property
    def current_card(self) -> Card | None:
        return self._state.current_card

    @property
    def show_answers(self) -> bool:
        return self._state.show_answers

    @property
    def cycle_completed(self) -> bool:
        return self._state.cycle_completed

    @property
    def lessons(self) -> list[str]:
        """Distinct lesson labels of the whole deck, sorted."""
        return sorted({card.lesson for card in self._cards})

    def filtered_pool(self) -> list[Card]:
        """Cards currently eligible for selection, in deck order."""
        return compute_filtered_pool(
            self._cards,
            self._state.selected_lessons,
            self._state.show_only_due_cards,
            self.clock(),
        )

    def progress(self) -> SessionProgress:
        """
        How far the session has got through the current pool.

        In due-only mode the count of distinct cards shown is not reduced
        when rated cards leave the pool, so ``current`` may exceed ``total``.
        """
        if self._state.show_only_due_cards:
            current = len(self._state.due_cards_seen)
        else:
            current = len(self._state.seen_in_cycle)
        return SessionProgress(current=current, total=len(self.filtered_pool()))

    def next_due_date(self) -> datetime | None:
        """Earliest future due date among cards of the selected lessons."""
        now = self.clock()
        upcoming = [
            card.next_due
            for card in compute_filtered_pool(self._cards, self._state.selected_lessons, False, now)
            if card.next_due > now
        ]
        return min(upcoming, default=None)

    def search_cards(self, text: str) -> list[Card]:
        """Cards whose lesson, question or answer contains ``text``, ignoring case."""
        if not text:
            return self.cards
        return [card for card in self._cards if card.matches(text)]

    def find_card(self, card_id: CardId) -> Card | None:
        return next((card for card in self._cards if card.id == card_id), None)

    # Subscriptions

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register a listener for session events.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, event: SessionEvent) -> None:
        logger.debug("session_event", **event.to_dict())
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("session_listener_failed", event_type=event.event_type)

    # Lifecycle

    def start(self) -> Card | None:
        """Load the deck from storage (or the seeded sample) and present a first card."""
        self._cards = self.deck_repository.load()
        self._stats = compute_deck_stats(self._cards)
        self.reset_cycle()
        logger.info("study_session_started", card_count=len(self._cards))
        return self.pick_next()

    # Selection

    def pick_next(self) -> Card | None:
        """
        Choose the next card to present.

        In all-cards mode cards already shown in the current cycle are
        skipped; once every card of the pool has been shown the cycle wraps
        and ``cycle_completed`` is set. In due-only mode every due card is a
        candidate on every pick.

        Returns:
            The presented card, or None if the pool is empty
        """
        state = self._state
        pool = self.filtered_pool()
        state.cycle_completed = False
        if not pool:
            state.current_card = None
            state.show_answers = False
            return None

        wrapped = False
        if state.show_only_due_cards:
            candidates = pool
        else:
            candidates = [card for card in pool if card.id not in state.seen_in_cycle]
            if not candidates:
                state.seen_in_cycle.clear()
                state.cycle_completed = True
                wrapped = True
                candidates = pool
                logger.debug("cycle_completed", pool_size=len(pool))
                self._publish(CycleCompleted(pool_size=len(pool)))

        chosen = self.scheduler.choose(candidates)
        state.current_card = chosen
        state.show_answers = False

        if state.show_only_due_cards:
            state.due_cards_seen.add(chosen.id)
        else:
            state.seen_in_cycle.add(chosen.id)

        self._publish(CardPresented(card_id=chosen.id, cycle_wrapped=wrapped))
        return chosen

    def reveal(self) -> None:
        """Show the answer side of the current card."""
        if self._state.current_card is None:
            return
        self._state.show_answers = True

    def rate(self, rating: Rating) -> Card | None:
        """
        Record a rating for the current card and move on to the next one.

        Args:
            rating: The self-assessed recall quality

        Returns:
            The updated card, or None if there is no current card or it is
            no longer in the deck
        """
        current = self._state.current_card
        if current is None:
            return None
        card = self.find_card(current.id)
        if card is None:
            logger.warning("rate_ignored_missing_card", card_id=str(current.id))
            return None

        card.record_rating(rating, self.scheduler.next_due(rating, self.clock()))
        self._persist()
        logger.info(
            "card_rated",
            card_id=str(card.id),
            rating=rating.value,
            next_due=card.next_due.isoformat(),
        )
        self._publish(CardRated(card_id=card.id, rating=rating))
        self.pick_next()
        return card

    def reset_cycle(self) -> None:
        """Forget which cards were shown, so progress restarts for a new pool."""
        self._state.seen_in_cycle.clear()
        self._state.due_cards_seen.clear()
        self._state.cycle_completed = False

    # Filters

    def set_selected_lessons(self, lessons: Iterable[str]) -> Card | None:
        """Restrict the pool to ``lessons`` (empty means all lessons)."""
        self._state.selected_lessons = set(lessons)
        return self._filter_changed()

    def toggle_lesson(self, lesson: str) -> Card | None:
        """Add ``lesson`` to the selection, or remove it if already selected."""
        self._state.selected_lessons ^= {lesson}
        return self._filter_changed()

    def clear_lesson_selection(self) -> Card | None:
        return self.set_selected_lessons(())

    def set_show_only_due_cards(self, show_only_due_cards: bool) -> Card | None:
        """Switch between due-only and all-cards mode."""
        self._state.show_only_due_cards = show_only_due_cards
        return self._filter_changed()

    def _filter_changed(self) -> Card | None:
        self.reset_cycle()
        self._publish(
            FilterChanged(
                selected_lessons=frozenset(self._state.selected_lessons),
                show_only_due_cards=self._state.show_only_due_cards,
            )
        )
        return self.pick_next()

    # Card CRUD

    def add_card(self, lesson: str, question: str, answer: str) -> Card:
        """Append a new, unrated card to the deck; present it if nothing is on screen."""
        card = Card.create(lesson, question, answer)
        self._cards.append(card)
        self._persist()
        logger.info("card_added", card_id=str(card.id), lesson=card.lesson)
        self._publish(CardAdded(card_id=card.id))
        if self._state.current_card is None:
            self.pick_next()
        return card

    def update_card(self, card_id: CardId, lesson: str, question: str, answer: str) -> Card | None:
        """
        Change a card's text, keeping its review history.

        If the card on screen moves out of the selected lessons, the session
        moves on to another card.

        Returns:
            The updated card, or None if no card has this id
        """
        card = self.find_card(card_id)
        if card is None:
            return None
        card.update_content(lesson, question, answer)
        self._persist()
        logger.info("card_updated", card_id=str(card.id))
        self._publish(CardUpdated(card_id=card.id))

        current = self._state.current_card
        if current is not None and current.id == card_id and card not in self.filtered_pool():
            self._state.seen_in_cycle.discard(card_id)
            self._state.due_cards_seen.discard(card_id)
            self.pick_next()
        return card

    def delete_card(self, card_id: CardId) -> bool:
        """
        Remove a card from the deck.

        Deleting the card on screen moves the session on to another card.

        Returns:
            True if a card was removed
        """
        card = self.find_card(card_id)
        if card is None:
            return False
        self._cards.remove(card)
        self._state.seen_in_cycle.discard(card_id)
        self._state.due_cards_seen.discard(card_id)
        self._persist()
        logger.info("card_deleted", card_id=str(card_id))
        self._publish(CardDeleted(card_id=card_id))

        current = self._state.current_card
        if current is not None and current.id == card_id:
            self.pick_next()
        return True

    # Deck lifecycle

    def replace_with_csv(self, text: str | bytes) -> list[Card]:
        """Replace the whole deck with cards parsed from CSV; history is discarded."""
        cards = self.csv_parser(text)
        self._replace_deck(cards, source="csv")
        return self.cards

    def import_deck(self, data: bytes) -> list[Card]:
        """
        Replace the deck with an exported deck.

        Raises:
            DeckDecodeError: If ``data`` is not a valid deck; the loaded deck
                is left untouched
        """
        cards = self.deck_repository.import_deck(data)
        self._replace_deck(cards, source="import")
        return self.cards

    def export_deck(self) -> bytes:
        return self.deck_repository.export_deck(self._cards)

    def create_new_deck(self) -> None:
        """Start over with an empty deck."""
        self._state.selected_lessons.clear()
        self._replace_deck([], source="new")

    def create_sample_deck(self) -> None:
        """Start over with the sample cards."""
        self._state.selected_lessons.clear()
        self._replace_deck(self.sample_deck_factory(), source="sample")

    def delete_deck(self) -> None:
        """Delete the deck; the sample cards take its place."""
        self.create_sample_deck()

    # Backups

    def create_backup(self) -> BackupInfo:
        backup = self.deck_repository.create_backup(self._cards)
        logger.info("backup_created", backup_id=backup.id, card_count=len(self._cards))
        return backup

    def list_backups(self) -> list[BackupInfo]:
        return self.deck_repository.list_backups()

    def restore_backup(self, backup_id: str) -> list[Card]:
        """
        Make a backup the live deck.

        Raises:
            BackupNotFoundError: If the backup does not exist
            DeckDecodeError: If the backup is corrupt
        """
        cards = self.deck_repository.restore_backup(backup_id)
        # The repository already wrote the restored deck file
        self._install_deck(cards, source="backup")
        return self.cards

    def delete_backup(self, backup_id: str) -> None:
        self.deck_repository.delete_backup(backup_id)
        logger.info("backup_deleted", backup_id=backup_id)

    # Internals

    def _persist(self) -> None:
        self._stats = compute_deck_stats(self._cards)
        if not self.deck_repository.save(self._cards):
            logger.warning("deck_save_failed", card_count=len(self._cards))

    def _replace_deck(self, cards: list[Card], source: str) -> None:
        self._cards = list(cards)
        self._persist()
        self._announce_replacement(source)

    def _install_deck(self, cards: list[Card], source: str) -> None:
        self._cards = list(cards)
        self._stats = compute_deck_stats(self._cards)
        self._announce_replacement(source)

    def _announce_replacement(self, source: str) -> None:
        self.reset_cycle()
        logger.info("deck_replaced", source=source, card_count=len(self._cards))
        self._publish(DeckReplaced(source=source, card_count=len(self._cards)))
        self.pick_next()

"""Pytest configuration and fixtures."""

import random
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest

from flipdeck.application.learning.use_cases.study_session_use_case import StudySessionUseCase
from flipdeck.domain.learning.entities.card import Card
from flipdeck.domain.learning.services.card_scheduler import CardScheduler
from flipdeck.infrastructure.learning.repositories.deck_repository import JsonDeckRepository
from flipdeck.infrastructure.learning.sample_deck import build_sample_deck
from flipdeck.infrastructure.learning.services.csv_card_parser import parse_csv
from tests.factories import NOW

BACKUP_TIME = datetime(2024, 1, 15, 14, 30)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def deck_repository(tmp_path: Path) -> JsonDeckRepository:
    """A repository rooted in a fresh temporary directory."""
    return JsonDeckRepository(
        deck_path=tmp_path / "deck.json",
        backups_dir=tmp_path / "backups",
        clock=lambda: BACKUP_TIME,
    )


@pytest.fixture
def make_session(
    deck_repository: JsonDeckRepository,
) -> Callable[..., StudySessionUseCase]:
    """
    Build a started session over ``cards``.

    The deck is written to storage first so ``start()`` goes through the
    normal load path.
    """

    def _make(
        cards: list[Card] | None = None,
        *,
        show_only_due_cards: bool = False,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = lambda: NOW,
    ) -> StudySessionUseCase:
        if cards is not None:
            deck_repository.save(cards)
        session = StudySessionUseCase(
            deck_repository=deck_repository,
            scheduler=CardScheduler(rng or random.Random(1234)),
            csv_parser=parse_csv,
            sample_deck_factory=build_sample_deck,
            clock=clock,
            show_only_due_cards=show_only_due_cards,
        )
        session.start()
        return session

    return _make

import random

from dependency_injector import containers, providers

from flipdeck.application.learning.use_cases.study_session_use_case import StudySessionUseCase
from flipdeck.config import configure_logging, get_settings
from flipdeck.domain.learning.services.card_scheduler import CardScheduler
from flipdeck.infrastructure.learning.repositories.deck_repository import JsonDeckRepository
from flipdeck.infrastructure.learning.sample_deck import build_sample_deck
from flipdeck.infrastructure.learning.services.csv_card_parser import parse_csv


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    settings = providers.Singleton(get_settings)

    # Storage
    deck_repository = providers.Singleton(
        JsonDeckRepository,
        deck_path=settings.provided.deck_path,
        backups_dir=settings.provided.backups_dir,
    )

    # Domain services (pure domain logic, no storage)
    random_source = providers.Singleton(random.Random)
    card_scheduler = providers.Factory(CardScheduler, rng=random_source)

    # Learning module use cases
    study_session_use_case = providers.Singleton(
        StudySessionUseCase,
        deck_repository=deck_repository,
        scheduler=card_scheduler,
        csv_parser=providers.Object(parse_csv),
        sample_deck_factory=providers.Object(build_sample_deck),
        show_only_due_cards=settings.provided.SHOW_ONLY_DUE_CARDS,
    )


# Initialize container
container = Container()


def create_study_session(target: Container = container) -> StudySessionUseCase:
    """Configure logging for the environment and return the started session."""
    settings = target.settings()
    configure_logging(settings.ENVIRONMENT, settings.LOG_LEVEL)
    session = target.study_session_use_case()
    session.start()
    return session

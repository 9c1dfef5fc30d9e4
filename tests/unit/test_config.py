"""Tests for application settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from flipdeck.config import Settings


def test_paths_derive_from_data_dir(tmp_path: Path) -> None:
    settings = Settings(DATA_DIR=tmp_path)

    assert settings.deck_path == tmp_path / "deck.json"
    assert settings.backups_dir == tmp_path / "backups"


def test_data_dir_expands_home() -> None:
    settings = Settings(DATA_DIR=Path("~/decks"))

    assert settings.DATA_DIR == Path.home() / "decks"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("DECK_FILENAME", "cards.json")
    monkeypatch.setenv("SHOW_ONLY_DUE_CARDS", "false")

    settings = Settings()

    assert settings.deck_path == tmp_path / "cards.json"
    assert settings.SHOW_ONLY_DUE_CARDS is False


@pytest.mark.parametrize("name", ["../deck.json", "nested/deck.json", "  "])
def test_nested_file_names_rejected(name: str) -> None:
    with pytest.raises(ValidationError):
        Settings(DECK_FILENAME=name)


def test_unknown_environment_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(ENVIRONMENT="staging")


def test_log_level_defaults_to_none() -> None:
    assert Settings().LOG_LEVEL is None
    assert Settings(LOG_LEVEL="WARNING").LOG_LEVEL == "WARNING"

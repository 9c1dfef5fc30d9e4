"""Repository for the JSON deck file and its backups."""

import logging
import os
import re
import tempfile
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from flipdeck.application.learning.use_cases.dtos.backup_dtos import BackupInfo
from flipdeck.domain.learning.entities.card import Card
from flipdeck.exceptions import BackupNotFoundError, DeckDecodeError, StorageError
from flipdeck.infrastructure.learning.mappers.card_mapper import CardMapper
from flipdeck.infrastructure.learning.sample_deck import build_sample_deck
from flipdeck.infrastructure.learning.schemas.deck_schemas import DeckFile

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "deck_backup_"
BACKUP_SUFFIX = ".json"
BACKUP_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M"
BACKUP_NAME_PATTERN = re.compile(r"^deck_backup_(\d{4}-\d{2}-\d{2}_\d{2}-\d{2})\.json$")


def _local_now() -> datetime:
    return datetime.now().astimezone()


def write_atomic(path: Path, data: bytes) -> None:
    """
    Replace ``path`` with ``data`` in one step.

    The bytes go to a temporary file in the same directory which is then
    renamed over the target, so readers see either the old or the new file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as tmp_file:
            tmp_file.write(data)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class JsonDeckRepository:
    """Repository for one deck stored as ``deck.json`` plus a backups directory."""

    def __init__(
        self,
        deck_path: Path,
        backups_dir: Path,
        clock: Callable[[], datetime] = _local_now,
        sample_deck_factory: Callable[[], list[Card]] = build_sample_deck,
    ) -> None:
        self.deck_path = deck_path
        self.backups_dir = backups_dir
        self.clock = clock
        self.sample_deck_factory = sample_deck_factory
        self.mapper = CardMapper()

    def exists(self) -> bool:
        return self.deck_path.is_file()

    def load(self) -> list[Card]:
        """
        Load the deck, seeding the sample deck when there is none.

        An unreadable or corrupt file is logged and replaced by the sample
        deck rather than raised.

        Returns:
            The deck's cards in stored order
        """
        if not self.exists():
            logger.info(f"No deck file at {self.deck_path}, seeding sample deck")
            return self._seed()

        try:
            cards = self._decode(self.deck_path.read_bytes(), source="deck file")
        except (OSError, DeckDecodeError) as e:
            logger.warning(f"Failed to load deck {self.deck_path}: {e!s}; using sample deck")
            return self._seed()

        logger.info(f"Loaded {len(cards)} cards from {self.deck_path}")
        return cards

    def save(self, cards: list[Card]) -> bool:
        """
        Persist the deck atomically.

        Returns:
            True if written, False if the write failed
        """
        try:
            write_atomic(self.deck_path, self.export_deck(cards))
        except OSError as e:
            logger.error(f"Failed to save deck {self.deck_path}: {e!s}", exc_info=True)
            return False
        logger.debug(f"Saved {len(cards)} cards to {self.deck_path}")
        return True

    def import_deck(self, data: bytes) -> list[Card]:
        """
        Decode an exported deck.

        Raises:
            DeckDecodeError: If the payload is not a valid deck
        """
        return self._decode(data, source="deck")

    def export_deck(self, cards: list[Card]) -> bytes:
        deck_file = self.mapper.deck_to_file(cards)
        return deck_file.model_dump_json(by_alias=True, indent=2).encode("utf-8")

    def list_backups(self) -> list[BackupInfo]:
        """
        List backups, newest first.

        The fixed-width timestamp in the file name makes descending name
        order the same as newest-first.
        """
        if not self.backups_dir.is_dir():
            return []
        paths = [
            path
            for path in self.backups_dir.glob(f"{BACKUP_PREFIX}*{BACKUP_SUFFIX}")
            if path.is_file()
        ]
        paths.sort(key=lambda path: path.name, reverse=True)
        return [self._backup_info(path) for path in paths]

    def create_backup(self, cards: list[Card]) -> BackupInfo:
        """
        Write a backup named after the current minute.

        A second backup within the same minute replaces the first.

        Raises:
            StorageError: If the file could not be written
        """
        name = f"{BACKUP_PREFIX}{self.clock().strftime(BACKUP_TIMESTAMP_FORMAT)}{BACKUP_SUFFIX}"
        path = self.backups_dir / name
        try:
            write_atomic(path, self.export_deck(cards))
        except OSError as e:
            logger.error(f"Failed to write backup {path}: {e!s}", exc_info=True)
            raise StorageError(f"Could not write backup {name}: {e!s}") from e
        logger.info(f"Created backup {path} ({len(cards)} cards)")
        return self._backup_info(path)

    def restore_backup(self, backup_id: str) -> list[Card]:
        """
        Decode a backup and make it the live deck file.

        Raises:
            BackupNotFoundError: If the backup does not exist
            DeckDecodeError: If the backup is corrupt
            StorageError: If the live deck could not be overwritten
        """
        path = self._backup_path(backup_id)
        try:
            data = path.read_bytes()
        except FileNotFoundError as e:
            raise BackupNotFoundError(backup_id) from e
        except OSError as e:
            raise StorageError(f"Could not read backup {backup_id}: {e!s}") from e

        cards = self._decode(data, source="backup")
        try:
            write_atomic(self.deck_path, self.export_deck(cards))
        except OSError as e:
            logger.error(f"Failed to restore backup {path}: {e!s}", exc_info=True)
            raise StorageError(f"Could not restore backup {backup_id}: {e!s}") from e

        logger.info(f"Restored backup {path} ({len(cards)} cards)")
        return cards

    def delete_backup(self, backup_id: str) -> None:
        """
        Delete a backup file.

        Raises:
            BackupNotFoundError: If the backup does not exist
        """
        path = self._backup_path(backup_id)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise BackupNotFoundError(backup_id) from e
        except OSError as e:
            raise StorageError(f"Could not delete backup {backup_id}: {e!s}") from e
        logger.info(f"Deleted backup {path}")

    def _seed(self) -> list[Card]:
        cards = self.sample_deck_factory()
        self.save(cards)
        return cards

    def _decode(self, data: bytes, source: str) -> list[Card]:
        try:
            deck_file = DeckFile.model_validate_json(data)
        except PydanticValidationError as e:
            raise DeckDecodeError(str(e), source=source) from e
        return self.mapper.deck_to_domain(deck_file)

    def _backup_path(self, backup_id: str) -> Path:
        # Ids are bare file names; anything else cannot name a backup
        if (
            Path(backup_id).name != backup_id
            or not backup_id.startswith(BACKUP_PREFIX)
            or not backup_id.endswith(BACKUP_SUFFIX)
        ):
            raise BackupNotFoundError(backup_id)
        path = self.backups_dir / backup_id
        if not path.is_file():
            raise BackupNotFoundError(backup_id)
        return path

    def _backup_info(self, path: Path) -> BackupInfo:
        created_at = None
        match = BACKUP_NAME_PATTERN.match(path.name)
        if match:
            try:
                created_at = datetime.strptime(match.group(1), BACKUP_TIMESTAMP_FORMAT)
            except ValueError:
                created_at = None
        return BackupInfo(id=path.name, path=path, created_at=created_at)

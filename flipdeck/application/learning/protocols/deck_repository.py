"""Protocol for deck storage in learning context."""

from typing import Protocol

from flipdeck.application.learning.use_cases.dtos.backup_dtos import BackupInfo
from flipdeck.domain.learning.entities.card import Card


class DeckRepositoryProtocol(Protocol):
    """Protocol for persisting a single deck and its backups."""

    def exists(self) -> bool:
        """Whether a persisted deck is present."""
        ...

    def load(self) -> list[Card]:
        """
        Load the persisted deck.

        A missing or unreadable deck is replaced by the sample deck, which is
        persisted before it is returned. Never raises for storage problems.

        Returns:
            The deck's cards in stored order
        """
        ...

    def save(self, cards: list[Card]) -> bool:
        """
        Atomically replace the persisted deck.

        Args:
            cards: The full deck

        Returns:
            True if written, False if the write failed (already logged)
        """
        ...

    def import_deck(self, data: bytes) -> list[Card]:
        """
        Decode an exported deck without touching storage.

        Raises:
            DeckDecodeError: If the payload is not a valid deck
        """
        ...

    def export_deck(self, cards: list[Card]) -> bytes:
        """Serialize cards in the persisted deck format."""
        ...

    def list_backups(self) -> list[BackupInfo]:
        """Return backups, newest first."""
        ...

    def create_backup(self, cards: list[Card]) -> BackupInfo:
        """
        Write a timestamped backup of ``cards``.

        Raises:
            StorageError: If the backup could not be written
        """
        ...

    def restore_backup(self, backup_id: str) -> list[Card]:
        """
        Make a backup the live deck and return its cards.

        Raises:
            BackupNotFoundError: If no such backup exists
            DeckDecodeError: If the backup is corrupt
        """
        ...

    def delete_backup(self, backup_id: str) -> None:
        """
        Delete a backup.

        Raises:
            BackupNotFoundError: If no such backup exists
        """
        ...

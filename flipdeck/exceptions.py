"""Custom exception hierarchy for the flipdeck application."""


class FlipdeckError(Exception):
    """Base exception for all flipdeck errors."""

    def __init__(self, message: str) -> None:
        """Initialize exception with message."""
        self.message = message
        super().__init__(self.message)


class NotFoundError(FlipdeckError):
    """Resource not found error."""


class BackupNotFoundError(NotFoundError):
    """Backup file not found error."""

    def __init__(self, backup_id: str) -> None:
        """Initialize with the backup id (its file name)."""
        self.backup_id = backup_id
        super().__init__(f"Backup {backup_id!r} not found")


class DeckDecodeError(FlipdeckError):
    """An imported deck or backup could not be decoded."""

    def __init__(self, reason: str, source: str = "deck") -> None:
        """Initialize with reason for the decode failure."""
        self.reason = reason
        self.source = source
        super().__init__(f"Invalid {source}: {reason}")


class StorageError(FlipdeckError):
    """A requested file operation failed."""

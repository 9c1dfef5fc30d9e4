"""DTOs for deck backups."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class BackupInfo:
    """A deck backup on disk, identified by its file name."""

    id: str
    path: Path
    created_at: datetime | None

    @property
    def label(self) -> str:
        """Human readable name, e.g. ``2024-01-15 14:30``; the file name if unparsable."""
        if self.created_at is None:
            return self.id
        return self.created_at.strftime("%Y-%m-%d %H:%M")

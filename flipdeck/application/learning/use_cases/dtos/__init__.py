from .backup_dtos import BackupInfo
from .study_session_dtos import SessionProgress, SessionState

__all__ = ["BackupInfo", "SessionProgress", "SessionState"]

from domain.constants import BACKUP_SUFFIX
from stream_io.file_copy import snapshot_file


def backup_path_for(dest: str) -> str:
    return dest + BACKUP_SUFFIX


class BackupService:
    def __init__(self, logger):
        self.logger = logger

    def backup(self, dest: str) -> str | None:
        """Best-effort snapshot of an existing destination.

        Returns the backup path, or None when the snapshot failed. Failures
        are logged and never raised.
        """
        target = backup_path_for(dest)
        try:
            n = snapshot_file(dest, target)
        except OSError as e:
            self.logger.warn(f"Backup of {dest} failed ({type(e).__name__}: {e}); continuing without backup")
            return None
        self.logger.info(f"Existing destination backed up to {target} ({n} bytes)")
        return target

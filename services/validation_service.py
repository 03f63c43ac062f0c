# Pre-flight checks for a transfer. Each failing check raises and stops the rest.

import os

from domain.errors import InsufficientSpace, PermissionDenied, SameFile, SourceNotFound
from domain.models import TransferRequest
from stream_io.free_space import free_bytes_for
from stream_io.path_utils import nearest_existing_dir


class ValidationService:
    def __init__(self, backup_service, logger, backup: bool = True):
        self.backup_service = backup_service
        self.logger = logger
        self.backup_enabled = backup

    def validate(self, request: TransferRequest) -> None:
        src = request.source_path
        dst = request.destination_path

        if not os.path.exists(src):
            raise SourceNotFound(src)
        if not os.path.isfile(src):
            raise SourceNotFound(src, reason="is not a regular file")
        self.logger.info(f"Source found: {src}")

        if not os.access(src, os.R_OK):
            raise PermissionDenied(src)
        self.logger.info("Source is readable")

        if os.path.exists(dst) and os.path.samefile(src, dst):
            raise SameFile(src, dst)

        size = os.path.getsize(src)
        if size == 0:
            self.logger.warn(f"Source file {src} is empty; destination will be empty")
        else:
            self.logger.info(f"Source size: {size} bytes")

        if os.path.exists(dst):
            if self.backup_enabled:
                self.logger.info(f"Destination {dst} exists; creating backup")
                self.backup_service.backup(dst)
            else:
                self.logger.info(f"Destination {dst} exists; it will be overwritten (backup disabled)")

        available = free_bytes_for(dst)
        if available < size:
            raise InsufficientSpace(nearest_existing_dir(dst), size, available)
        self.logger.info(f"Disk space OK: {available} bytes available, {size} required")

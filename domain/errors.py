class StreamCopyError(Exception):
    """Base exception for stream copy failures."""
    hints: tuple = ()


class ValidationError(StreamCopyError):
    """Raised by the pre-flight checks, before any destination byte is written."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path


class SourceNotFound(ValidationError):
    hints = (
        "Check that the source path is spelled correctly",
        "Check that the source is a regular file, not a directory",
    )

    def __init__(self, path: str, reason: str = "does not exist"):
        super().__init__(path, f"Source file {path} {reason}")


class PermissionDenied(ValidationError):
    hints = (
        "Check read permissions on the source file",
        "Check write permissions on the destination directory",
    )

    def __init__(self, path: str):
        super().__init__(path, f"Source file {path} is not readable")


class SameFile(ValidationError):
    hints = ("Choose a destination different from the source",)

    def __init__(self, path: str, dest: str):
        super().__init__(path, f"'{path}' and '{dest}' are the same file")
        self.dest = dest


class InsufficientSpace(ValidationError):
    hints = (
        "Check available disk space on the destination volume",
        "Free some space or choose another destination",
    )

    def __init__(self, path: str, required: int, available: int):
        super().__init__(
            path,
            f"Not enough space at {path}: required={required} available={available}",
        )
        self.required = required
        self.available = available


class CopyError(StreamCopyError):
    """Raised when an I/O fault aborts the copy loop.

    Carries the phase that failed, the bytes already written and the
    stats collected so far, so the caller can still report on the run.
    """

    hints = (
        "Check source integrity (the file may be truncated or still being written)",
        "Check available disk space on the destination volume",
        "Check permissions on both paths",
    )

    def __init__(self, phase: str, bytes_processed: int, cause: BaseException, stats=None):
        super().__init__(f"Copy failed during {phase} after {bytes_processed} bytes: {type(cause).__name__}: {cause}")
        self.phase = phase
        self.bytes_processed = bytes_processed
        self.cause = cause
        self.stats = stats

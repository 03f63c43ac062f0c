# Unit-at-a-time copy with progress sampling, guaranteed handle release and
# best-effort removal of a truncated destination after a failed copy.

import os
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional

from domain.constants import (
    MODE_BYTE,
    PHASE_CLEANUP,
    PHASE_COPY,
    PHASE_INIT,
    PHASE_READ,
    PHASE_WRITE,
)
from domain.errors import CopyError
from domain.models import CopyConfig, TransferRequest, TransferStats, VerifyResult
from services.backup_service import BackupService
from services.validation_service import ValidationService
from stream_io.path_utils import ensure_parent, file_size
from stream_io.unit_stream import open_reader, open_writer
from utils.timeutil import elapsed_ms


@dataclass
class Handles:
    reader: Optional[object] = None
    writer: Optional[object] = None


def release(handles: Handles, logger) -> None:
    """Close reader and writer independently. Close failures are logged, never raised."""
    for name, h in (("reader", handles.reader), ("writer", handles.writer)):
        if h is None:
            continue
        try:
            h.close()
        except Exception as e:
            logger.error(f"Failed to close {name} for {h.path}: {type(e).__name__}: {e}")


@contextmanager
def open_handles(request: TransferRequest, logger):
    handles = Handles()
    try:
        try:
            ensure_parent(request.destination_path)
            handles.reader = open_reader(request.source_path, request.mode, request.encoding)
            handles.writer = open_writer(request.destination_path, request.mode, request.encoding)
        except (OSError, LookupError) as e:
            raise CopyError(PHASE_INIT, 0, e) from e
        yield handles
    finally:
        release(handles, logger)


def throughput(bytes_done: int, ms: float) -> float:
    """Bytes per second from a byte count and elapsed milliseconds."""
    if ms <= 0:
        return 0.0
    return bytes_done / ms * 1000.0


class StreamCopier:
    def __init__(self, logger, config: CopyConfig | None = None):
        config = config or CopyConfig()
        if config.progress_interval < 1:
            raise ValueError("progress_interval must be >= 1")
        self.logger = logger
        self.progress_interval = config.progress_interval
        self.validator = ValidationService(BackupService(logger), logger, backup=config.backup)

    def validate(self, request: TransferRequest) -> None:
        self.validator.validate(request)

    def copy(self, request: TransferRequest, stop_flag=None, progress_cb=None) -> TransferStats:
        """Copy source to destination one unit at a time.

        stop_flag is polled before every unit; when it returns True the loop
        stops and the destination keeps the prefix copied so far.
        progress_cb(bytes_copied, source_size, bytes_per_sec) is called every
        progress_interval units; without it the sample is logged instead.

        Raises CopyError on any read/write fault, after both handles are
        released and a truncated destination has been removed.
        """
        stats = TransferStats()
        stats.started_at = time.perf_counter()
        try:
            stats.source_size = os.path.getsize(request.source_path)
        except OSError as e:
            stats.ended_at = time.perf_counter()
            self.logger.error(f"Source {request.source_path} vanished before copy: {e}")
            raise CopyError(PHASE_INIT, 0, e, stats) from e
        marks = [stats.started_at]

        self.logger.info(f"Copying {request.source_path} -> {request.destination_path} ({request.mode} mode)")
        try:
            with open_handles(request, self.logger) as handles:
                marks.append(time.perf_counter())
                try:
                    self._pump(handles, stats, stop_flag, progress_cb, bounded=request.mode == MODE_BYTE)
                finally:
                    marks.append(time.perf_counter())
        except CopyError as e:
            if e.stats is None:
                e.stats = stats
            self.logger.error(
                f"{e} (source={request.source_path}, destination={request.destination_path}, "
                f"bytes_processed={e.bytes_processed})"
            )
            # init failures never opened the writer, so the destination is untouched
            if e.phase != PHASE_INIT:
                self._remove_partial(request, stats)
            raise
        finally:
            stats.ended_at = time.perf_counter()
            self._record_phases(stats, marks)

        if not stats.interrupted:
            self.logger.info(f"Copy finished: {stats.bytes_copied} bytes")
        return stats

    def _pump(self, handles: Handles, stats: TransferStats, stop_flag, progress_cb, bounded: bool = True):
        reader = handles.reader
        writer = handles.writer
        loop_start = time.perf_counter()

        # Byte mode: data appended to the source after we started is not copied.
        # Char mode ends on end of stream only, since encoded sizes need not add up
        # to the source size (a BOM may be added or dropped).
        while not bounded or stats.bytes_copied < stats.source_size:
            if stop_flag and stop_flag():
                stats.interrupted = True
                self.logger.warn(f"Interrupted after {stats.bytes_copied} bytes")
                break

            try:
                unit = reader.read_unit()
            except (OSError, UnicodeError) as e:
                raise CopyError(PHASE_READ, stats.bytes_copied, e, stats) from e
            if unit is None:
                break

            try:
                n = writer.write_unit(unit)
            except (OSError, UnicodeError) as e:
                raise CopyError(PHASE_WRITE, stats.bytes_copied, e, stats) from e
            stats.bytes_copied += n
            stats.units_copied += 1

            if stats.units_copied % self.progress_interval == 0:
                rate = throughput(stats.bytes_copied, elapsed_ms(loop_start))
                if progress_cb:
                    progress_cb(stats.bytes_copied, stats.source_size, rate)
                else:
                    self.logger.info(f"Progress: {stats.bytes_copied}/{stats.source_size} bytes ({rate:.1f} B/s)")

    def _remove_partial(self, request: TransferRequest, stats: TransferStats):
        dst = request.destination_path
        if not os.path.isfile(dst):
            return
        size = file_size(dst)
        if size is None:
            return
        if size >= stats.source_size:
            self.logger.info(f"Destination {dst} already has full length ({size} bytes); left intact")
            return
        try:
            os.remove(dst)
            self.logger.warn(f"Removed partial destination {dst} ({size}/{stats.source_size} bytes)")
        except OSError as e:
            self.logger.error(f"Could not remove partial destination {dst}: {type(e).__name__}: {e}")

    @staticmethod
    def _record_phases(stats: TransferStats, marks: list[float]):
        # marks: [start, init done, copy loop done]; shorter when init failed
        end = stats.ended_at
        if len(marks) < 3:
            stats.phase_durations[PHASE_INIT] = end - marks[0]
            return
        stats.phase_durations[PHASE_INIT] = marks[1] - marks[0]
        stats.phase_durations[PHASE_COPY] = marks[2] - marks[1]
        stats.phase_durations[PHASE_CLEANUP] = end - marks[2]

    def verify(self, request: TransferRequest) -> VerifyResult:
        src_size = file_size(request.source_path)
        dst_size = file_size(request.destination_path)
        match = src_size is not None and src_size == dst_size
        if match:
            self.logger.info(f"Verify OK: source and destination are both {src_size} bytes")
        else:
            self.logger.warn(f"Verify mismatch: source={src_size} bytes, destination={dst_size} bytes")
        return VerifyResult(match=match, source_size=src_size or 0, destination_size=dst_size)

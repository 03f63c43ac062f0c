from dataclasses import dataclass, field
from typing import Dict, Optional

from domain.constants import (
    COPY_PHASES,
    DEFAULT_ENCODING,
    MODE_BYTE,
    PROGRESS_UPDATE_INTERVAL,
)


@dataclass(frozen=True)
class TransferRequest:
    source_path: str
    destination_path: str
    mode: str = MODE_BYTE
    encoding: str = DEFAULT_ENCODING  # only used in char mode


@dataclass(frozen=True)
class CopyConfig:
    progress_interval: int = PROGRESS_UPDATE_INTERVAL
    backup: bool = True
    mode: str = MODE_BYTE
    encoding: str = DEFAULT_ENCODING
    log_file: Optional[str] = None


@dataclass
class TransferStats:
    source_size: int = 0
    bytes_copied: int = 0
    units_copied: int = 0  # == bytes_copied in byte mode, characters in char mode
    started_at: float = 0.0
    ended_at: float = 0.0
    phase_durations: Dict[str, float] = field(
        default_factory=lambda: {p: 0.0 for p in COPY_PHASES}
    )
    interrupted: bool = False


@dataclass(frozen=True)
class PerformanceReport:
    total_ms: float
    phase_ms: Dict[str, float]
    average_bytes_per_sec: float
    efficiency: float  # copy phase / total


@dataclass(frozen=True)
class VerifyResult:
    match: bool
    source_size: int
    destination_size: Optional[int]


@dataclass
class TransferOutcome:
    ok: bool
    stats: Optional[TransferStats] = None
    report: Optional[PerformanceReport] = None
    verify: Optional[VerifyResult] = None
    error: Optional[Exception] = None

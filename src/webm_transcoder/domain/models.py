"""Domain models for the transcoding pipeline."""

import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import BinaryIO, List, Optional, Tuple


@dataclass(frozen=True)
class ObjectLocation:
    """Identifies a remote object by bucket and key."""

    bucket_id: str
    object_id: str

    def __post_init__(self):
        if not self.bucket_id:
            raise ValueError("bucket_id must not be empty")
        if not self.object_id:
            raise ValueError("object_id must not be empty")

    def __str__(self) -> str:
        return f"s3://{self.bucket_id}/{self.object_id}"


class TransferMode(str, Enum):
    """Where pipeline input and output live."""

    REMOTE = "remote"
    MOUNTED = "mounted"


@dataclass(frozen=True)
class TransferPlan:
    """I/O strategy decided once per invocation."""

    mode: TransferMode
    input_path: Path
    output_path: Path

    @property
    def is_mounted(self) -> bool:
        return self.mode is TransferMode.MOUNTED


class ProgressState:
    """
    Byte counters for one in-flight transfer.

    Written by the copy loop and read by the progress reporter thread.
    An unknown or zero total is stored as 1.
    """

    def __init__(self, total_bytes: Optional[int] = None):
        self.total_bytes = total_bytes if total_bytes and total_bytes > 0 else 1
        self.transferred_bytes = 0
        self._lock = threading.Lock()

    def advance(self, amount: int) -> None:
        """Add transferred bytes."""
        with self._lock:
            self.transferred_bytes += amount

    def snapshot(self) -> Tuple[int, int]:
        """Return (transferred_bytes, total_bytes)."""
        with self._lock:
            return self.transferred_bytes, self.total_bytes

    @property
    def percent(self) -> float:
        transferred, total = self.snapshot()
        return transferred / total * 100

    def format(self) -> str:
        transferred, total = self.snapshot()
        return f"{transferred} / {total} ({transferred / total * 100:.2f}%)"


@dataclass(frozen=True)
class EncoderInvocation:
    """A single encoder run: paths plus the full argument list."""

    input_path: Path
    output_path: Path
    args: Tuple[str, ...]

    def command(self, binary: str) -> List[str]:
        return [binary, *self.args]


@dataclass
class RemoteObject:
    """Body stream and reported size of a fetched object."""

    body: BinaryIO
    content_length: Optional[int] = None


@dataclass
class PipelineResult:
    """Outcome of processing one object."""

    location: ObjectLocation
    success: bool
    mode: Optional[TransferMode] = None
    output_key: Optional[str] = None
    output_path: Optional[Path] = None
    duration_seconds: float = 0.0
    error: Optional[BaseException] = None


@dataclass
class BatchResult:
    """Outcome of one event batch."""

    results: List[PipelineResult] = field(default_factory=list)

    def add(self, result: PipelineResult) -> None:
        self.results.append(result)

    @property
    def succeeded(self) -> List[PipelineResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> List[PipelineResult]:
        return [r for r in self.results if not r.success]

    @property
    def all_succeeded(self) -> bool:
        return not self.failed

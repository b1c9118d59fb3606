"""Protocol definitions for dependency inversion."""

from pathlib import Path
from typing import BinaryIO, Optional, Protocol

from .models import EncoderInvocation, ObjectLocation, RemoteObject, TransferPlan


class IObjectStore(Protocol):
    """Interface for a key-addressed object store."""

    def get_object(self, bucket: str, key: str) -> RemoteObject:
        """Open an object for streaming read."""
        ...

    def put_object(self, bucket: str, key: str, body: BinaryIO) -> None:
        """Store a byte stream as an object."""
        ...


class IMountResolver(Protocol):
    """Interface for choosing between mounted and remote I/O."""

    def resolve(self, object_id: str, result_name: str) -> Optional[TransferPlan]:
        """Return a mounted plan, or None when remote transfer is required."""
        ...


class IStreamTransfer(Protocol):
    """Interface for moving bytes between the store and local files."""

    def copy_from_remote(self, location: ObjectLocation, destination: Path) -> Path:
        """Download an object to a local file."""
        ...

    def copy_to_remote(self, source: Path, location: ObjectLocation) -> None:
        """Upload a local file as an object."""
        ...


class ITranscoder(Protocol):
    """Interface for the external encoder."""

    def run(self, input_path: Path, output_path: Path) -> EncoderInvocation:
        """Transcode input to output, raising on failure."""
        ...


class ILogger(Protocol):
    """Interface for logging."""

    def debug(self, message: str, **kwargs) -> None:
        ...

    def info(self, message: str, **kwargs) -> None:
        ...

    def warning(self, message: str, **kwargs) -> None:
        ...

    def error(self, message: str, **kwargs) -> None:
        ...

    def exception(self, message: str, **kwargs) -> None:
        """Log exception with traceback."""
        ...


class IMetricsCollector(Protocol):
    """Interface for collecting metrics."""

    def start_timer(self, name: str) -> None:
        ...

    def stop_timer(self, name: str) -> float:
        ...

    def get_summary(self) -> dict:
        ...

    def format_summary(self) -> str:
        ...

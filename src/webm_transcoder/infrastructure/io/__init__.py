"""IO utilities package."""

from .progress import ProgressReporter
from .stream_transfer import StreamTransfer

__all__ = ["ProgressReporter", "StreamTransfer"]

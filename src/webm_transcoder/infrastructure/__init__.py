"""Infrastructure layer: object store, mount, transfers, encoder, config."""

from .config import ConfigLoader, TranscoderConfig
from .io import ProgressReporter, StreamTransfer
from .media import FFmpegTranscoder
from .storage import MountResolver, S3ObjectStore, StoreCredentials, get_default_store

__all__ = [
    "ConfigLoader",
    "TranscoderConfig",
    "ProgressReporter",
    "StreamTransfer",
    "FFmpegTranscoder",
    "MountResolver",
    "S3ObjectStore",
    "StoreCredentials",
    "get_default_store",
]

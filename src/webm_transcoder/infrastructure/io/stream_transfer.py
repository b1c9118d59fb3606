"""Streaming copies between the object store and local files."""

from pathlib import Path
from typing import Optional

from ...domain.exceptions import FetchError, TransferError, UploadError
from ...domain.models import ObjectLocation, ProgressState
from ...domain.protocols import IObjectStore
from ...shared.logging import get_logger
from ...shared.types import LogSink
from .progress import ProgressReporter

DEFAULT_CHUNK_SIZE = 1024 * 1024


class StreamTransfer:
    """
    Moves object bytes through local files one chunk at a time.
    Implements IStreamTransfer protocol.
    """

    def __init__(
        self,
        store: IObjectStore,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        progress_interval: float = 1.0,
        progress_sink: Optional[LogSink] = None
    ):
        """
        Initialize stream transfer.

        Args:
            store: Object store to read from and write to
            chunk_size: Maximum bytes held in memory per read
            progress_interval: Seconds between progress lines
            progress_sink: Receives progress lines (module logger if None)
        """
        self.store = store
        self.chunk_size = chunk_size
        self.progress_interval = progress_interval
        self._progress_sink = progress_sink
        self._logger = get_logger(__name__)

    def copy_from_remote(self, location: ObjectLocation, destination: Path) -> Path:
        """
        Download an object to a local file.

        Each chunk is written before the next one is requested. On error the
        partial file is left where it is.

        Args:
            location: Object to download
            destination: Local file path

        Returns:
            Path to the downloaded file, flushed and closed

        Raises:
            FetchError: If the store does not return the object
            TransferError: If reading the body or writing the file fails
        """
        self._logger.info(f"Getting {location.object_id}")
        remote = self.store.get_object(location.bucket_id, location.object_id)
        if remote.body is None:
            raise FetchError("Object received with no body.")

        progress = ProgressState(remote.content_length)
        self._logger.info(f"Downloading {location.object_id}")

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with ProgressReporter(progress, self.progress_interval, self._progress_sink):
                with open(destination, 'wb') as f:
                    while True:
                        chunk = remote.body.read(self.chunk_size)
                        if not chunk:
                            break
                        f.write(chunk)
                        progress.advance(len(chunk))
        except Exception as e:
            raise TransferError(
                f"Failed to download {location} to {destination}: {e}"
            ) from e
        finally:
            close = getattr(remote.body, 'close', None)
            if close is not None:
                close()

        transferred, _ = progress.snapshot()
        self._logger.info(f"Downloaded {transferred} bytes to {destination}")
        return destination

    def copy_to_remote(self, source: Path, location: ObjectLocation) -> None:
        """
        Upload a local file as an object.

        Args:
            source: Local file path
            location: Destination object

        Raises:
            UploadError: If the file is missing or the store fails the put
        """
        self._logger.info(f"Uploading {location.object_id}")

        try:
            f = open(source, 'rb')
        except OSError as e:
            raise UploadError(f"Cannot open {source} for upload: {e}") from e

        with f:
            try:
                self.store.put_object(location.bucket_id, location.object_id, f)
            except UploadError:
                raise
            except Exception as e:
                raise UploadError(f"Upload of {location} failed: {e}") from e

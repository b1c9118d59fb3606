"""Domain exceptions for the transcoding pipeline."""

from typing import List, Optional


class DomainException(Exception):
    """Base exception for all domain errors."""
    pass


class ConfigurationError(DomainException):
    """Raised when configuration is missing or invalid."""
    pass


class FetchError(DomainException):
    """Raised when the object store fails to return an object."""
    pass


class TransferError(DomainException):
    """Raised when a streaming copy fails mid-transfer."""
    pass


class LaunchError(DomainException):
    """Raised when the encoder process cannot be started."""
    pass


class EncodeFailure(DomainException):
    """Raised when the encoder exits with a non-zero status."""

    def __init__(self, exit_code: Optional[int], timed_out: bool = False):
        self.exit_code = exit_code
        self.timed_out = timed_out
        if timed_out:
            message = "ffmpeg timed out and was killed"
        else:
            message = f"ffmpeg exited with status code: {exit_code}"
        super().__init__(message)


class UploadError(DomainException):
    """Raised when the result upload fails."""
    pass


class BatchProcessingError(DomainException):
    """Raised after a batch was attempted and at least one object failed."""

    def __init__(self, failures: List):
        self.failures = failures
        keys = ", ".join(r.location.object_id for r in failures)
        super().__init__(f"{len(failures)} object(s) failed: {keys}")

"""Domain layer package."""

from .models import (
    ObjectLocation,
    TransferMode,
    TransferPlan,
    ProgressState,
    EncoderInvocation,
    RemoteObject,
    PipelineResult,
    BatchResult,
)
from .exceptions import (
    DomainException,
    ConfigurationError,
    FetchError,
    TransferError,
    LaunchError,
    EncodeFailure,
    UploadError,
    BatchProcessingError,
)
from .protocols import (
    IObjectStore,
    IMountResolver,
    IStreamTransfer,
    ITranscoder,
    ILogger,
    IMetricsCollector,
)
from .naming import derive_result_name, result_key, source_file_name

__all__ = [
    # Models
    "ObjectLocation",
    "TransferMode",
    "TransferPlan",
    "ProgressState",
    "EncoderInvocation",
    "RemoteObject",
    "PipelineResult",
    "BatchResult",
    # Exceptions
    "DomainException",
    "ConfigurationError",
    "FetchError",
    "TransferError",
    "LaunchError",
    "EncodeFailure",
    "UploadError",
    "BatchProcessingError",
    # Protocols
    "IObjectStore",
    "IMountResolver",
    "IStreamTransfer",
    "ITranscoder",
    "ILogger",
    "IMetricsCollector",
    # Naming
    "derive_result_name",
    "result_key",
    "source_file_name",
]

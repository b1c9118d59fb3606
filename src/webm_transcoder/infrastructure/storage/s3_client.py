"""
S3-compatible object store client.

Infrastructure layer for Yandex Object Storage using boto3 (S3-compatible API).
"""

import threading
from dataclasses import dataclass
from typing import BinaryIO, Optional
import logging

import boto3
from boto3.s3.transfer import TransferConfig
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from ...domain.exceptions import FetchError, UploadError
from ...domain.models import RemoteObject
from ..config.loader import DEFAULT_ENDPOINT, DEFAULT_REGION, TranscoderConfig


@dataclass
class StoreCredentials:
    """Object store connection settings."""
    key_id: str
    secret_key: str
    region: str = DEFAULT_REGION
    endpoint: str = DEFAULT_ENDPOINT

    @classmethod
    def from_config(cls, config: TranscoderConfig) -> 'StoreCredentials':
        return cls(
            key_id=config.access_key_id,
            secret_key=config.secret_access_key,
            region=config.region,
            endpoint=config.endpoint,
        )

    def validate(self) -> bool:
        """Check if credentials are set."""
        return bool(self.key_id and self.secret_key)


class S3ObjectStore:
    """
    Object store implementation using boto3.
    Implements IObjectStore protocol.

    Reads are streamed from the response body; writes go through
    upload_fileobj, which streams the file and switches to multipart
    above the transfer threshold.
    """

    def __init__(
        self,
        credentials: StoreCredentials,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize object store client.

        Args:
            credentials: Store credentials and endpoint
            logger: Logger instance
        """
        if not credentials.validate():
            raise ValueError("Object store credentials not set (AWS_KEY_ID, AWS_SECRET_KEY)")

        self.credentials = credentials
        self.logger = logger or logging.getLogger(__name__)
        self._client = self._create_client()

        self._transfer_config = TransferConfig(
            multipart_threshold=64 * 1024 * 1024,  # 64MB
            multipart_chunksize=16 * 1024 * 1024,  # 16MB
            max_concurrency=4,
            use_threads=True
        )

    def _create_client(self):
        """Create S3 client with path-style addressing."""
        config = Config(
            signature_version='s3v4',
            s3={'addressing_style': 'path'}
        )

        return boto3.client(
            's3',
            endpoint_url=self.credentials.endpoint,
            region_name=self.credentials.region,
            aws_access_key_id=self.credentials.key_id,
            aws_secret_access_key=self.credentials.secret_key,
            config=config
        )

    def get_object(self, bucket: str, key: str) -> RemoteObject:
        """
        Open an object for streaming read.

        Args:
            bucket: Bucket name
            key: Object key

        Returns:
            RemoteObject with the streaming body and reported length

        Raises:
            FetchError: If the request fails or the response has no body
        """
        self.logger.debug(f"GetObject s3://{bucket}/{key}")

        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise FetchError(f"Failed to get s3://{bucket}/{key}: {e}") from e

        body = response.get('Body')
        if body is None:
            raise FetchError("Object received with no body.")

        return RemoteObject(body=body, content_length=response.get('ContentLength'))

    def put_object(self, bucket: str, key: str, body: BinaryIO) -> None:
        """
        Store a byte stream as an object.

        Args:
            bucket: Bucket name
            key: Object key
            body: Readable binary stream

        Raises:
            UploadError: If the store rejects or fails the upload
        """
        self.logger.debug(f"PutObject s3://{bucket}/{key}")

        try:
            self._client.upload_fileobj(
                body,
                bucket,
                key,
                Config=self._transfer_config
            )
        except (ClientError, BotoCoreError) as e:
            raise UploadError(f"Failed to put s3://{bucket}/{key}: {e}") from e


_default_store: Optional[S3ObjectStore] = None
_default_store_lock = threading.Lock()


def get_default_store(config: TranscoderConfig) -> S3ObjectStore:
    """
    Process-wide store client, created on first use.

    The client only carries connection settings, so one instance is shared
    by every invocation the process serves.
    """
    global _default_store
    with _default_store_lock:
        if _default_store is None:
            _default_store = S3ObjectStore(StoreCredentials.from_config(config))
        return _default_store


def reset_default_store() -> None:
    """Drop the cached client."""
    global _default_store
    with _default_store_lock:
        _default_store = None

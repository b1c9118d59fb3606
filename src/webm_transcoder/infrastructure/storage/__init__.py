"""Storage infrastructure."""

from .s3_client import S3ObjectStore, StoreCredentials, get_default_store, reset_default_store
from .mount_resolver import MountResolver

__all__ = [
    'S3ObjectStore',
    'StoreCredentials',
    'get_default_store',
    'reset_default_store',
    'MountResolver',
]

"""Blob store access: the HTTP client and the bucket resolver built on it."""

from .client import (
    DisabledStore,
    ObjectMeta,
    StorageClient,
    StorageError,
    StorageNotConfigured,
    build_store,
)
from .resolver import PLACEHOLDER_NAME, StorageResolver, list_bucket_files, storage_file_id

__all__ = [
    "DisabledStore",
    "ObjectMeta",
    "StorageClient",
    "StorageError",
    "StorageNotConfigured",
    "build_store",
    "PLACEHOLDER_NAME",
    "StorageResolver",
    "list_bucket_files",
    "storage_file_id",
]

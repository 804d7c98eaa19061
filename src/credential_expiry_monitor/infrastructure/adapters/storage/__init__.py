"""Snapshot storage adapters."""

from .blob import AzureBlobSnapshotStorage, BlobStorageConfig
from .local import LocalDirectoryStorage

__all__ = [
    "AzureBlobSnapshotStorage",
    "BlobStorageConfig",
    "LocalDirectoryStorage",
]

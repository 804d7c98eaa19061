"""Infrastructure adapters - Implementations of application ports."""

from .entra_id import EntraIdDirectoryService
from .notifications import GraphMailTransport, SmtpEmailTransport
from .storage import AzureBlobSnapshotStorage, LocalDirectoryStorage

__all__ = [
    "AzureBlobSnapshotStorage",
    "EntraIdDirectoryService",
    "GraphMailTransport",
    "LocalDirectoryStorage",
    "SmtpEmailTransport",
]

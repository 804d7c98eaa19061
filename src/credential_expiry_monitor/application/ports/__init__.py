"""Application ports - Interfaces for external adapters."""

from .directory_service import ApplicationRef, DirectoryService, PrincipalRef, RawCredential
from .email_transport import EmailMessage, EmailTransport
from .snapshot_storage import SnapshotStorage, StoredObject

__all__ = [
    "ApplicationRef",
    "DirectoryService",
    "EmailMessage",
    "EmailTransport",
    "PrincipalRef",
    "RawCredential",
    "SnapshotStorage",
    "StoredObject",
]

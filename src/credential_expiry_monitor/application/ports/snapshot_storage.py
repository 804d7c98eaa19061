"""Port for snapshot storage - driven/secondary port."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True, slots=True)
class StoredObject:
    """A stored snapshot key with its last-modified timestamp."""

    key: str
    last_modified: datetime


class SnapshotStorage(Protocol):
    """
    Port for storing dated snapshot files.

    Implemented both by the local working area and by durable storage.
    """

    @property
    def name(self) -> str:
        """Short label used in log messages."""
        ...

    async def verify(self) -> None:
        """
        Check that the storage context is usable.

        Raises:
            SnapshotStorageError: If the storage cannot be reached.
        """
        ...

    async def put(self, key: str, data: bytes) -> None:
        """Write (or overwrite) an object."""
        ...

    async def list_objects(self, prefix: str = "") -> list[StoredObject]:
        """List objects whose key starts with the prefix."""
        ...

    async def delete(self, key: str) -> None:
        """Delete an object."""
        ...

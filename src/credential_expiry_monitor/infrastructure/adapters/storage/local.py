"""Local working directory used as snapshot storage."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ....application.exceptions import SnapshotStorageError
from ....application.ports import StoredObject

logger = logging.getLogger(__name__)


class LocalDirectoryStorage:
    """Snapshot storage port over a plain directory; last-modified is the file mtime."""

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory)

    @property
    def name(self) -> str:
        """Short label used in log messages."""
        return f"local:{self._directory}"

    @property
    def directory(self) -> Path:
        """The working directory."""
        return self._directory

    async def verify(self) -> None:
        """Create the directory if needed."""
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Cannot create {self._directory}: {e}"
            raise SnapshotStorageError(msg) from e

    async def put(self, key: str, data: bytes) -> None:
        """Write a file."""
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            (self._directory / key).write_bytes(data)
        except OSError as e:
            msg = f"Cannot write {key}: {e}"
            raise SnapshotStorageError(msg) from e

    async def list_objects(self, prefix: str = "") -> list[StoredObject]:
        """List files whose name starts with the prefix."""
        if not self._directory.exists():
            return []
        try:
            return [
                StoredObject(
                    key=path.name,
                    last_modified=datetime.fromtimestamp(path.stat().st_mtime, UTC),
                )
                for path in sorted(self._directory.iterdir())
                if path.is_file() and path.name.startswith(prefix)
            ]
        except OSError as e:
            msg = f"Cannot list {self._directory}: {e}"
            raise SnapshotStorageError(msg) from e

    async def delete(self, key: str) -> None:
        """Remove a file."""
        try:
            (self._directory / key).unlink()
        except OSError as e:
            msg = f"Cannot delete {key}: {e}"
            raise SnapshotStorageError(msg) from e

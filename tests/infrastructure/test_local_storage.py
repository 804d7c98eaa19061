"""Tests for the local working directory storage."""

from __future__ import annotations

import asyncio
import os
from datetime import UTC, datetime
from pathlib import Path

import pytest

from credential_expiry_monitor.application.exceptions import SnapshotStorageError
from credential_expiry_monitor.infrastructure.adapters.storage import LocalDirectoryStorage


class TestLocalDirectoryStorage:
    """Tests for LocalDirectoryStorage."""

    def test_put_list_delete(self, tmp_path: Path) -> None:
        """Files are written, listed with mtime and removed."""
        storage = LocalDirectoryStorage(tmp_path / "reports")
        asyncio.run(storage.verify())
        asyncio.run(storage.put("2024-05-01-app-credentials.csv", b"Name\n"))

        path = tmp_path / "reports" / "2024-05-01-app-credentials.csv"
        assert path.read_bytes() == b"Name\n"

        stamp = datetime(2024, 4, 1, 12, 0, tzinfo=UTC).timestamp()
        os.utime(path, (stamp, stamp))

        objects = asyncio.run(storage.list_objects())
        assert [o.key for o in objects] == ["2024-05-01-app-credentials.csv"]
        assert objects[0].last_modified == datetime(2024, 4, 1, 12, 0, tzinfo=UTC)

        asyncio.run(storage.delete("2024-05-01-app-credentials.csv"))
        assert not path.exists()

    def test_list_missing_directory_is_empty(self, tmp_path: Path) -> None:
        """A directory that was never created has no snapshots."""
        assert asyncio.run(LocalDirectoryStorage(tmp_path / "nope").list_objects()) == []

    def test_prefix_filter(self, tmp_path: Path) -> None:
        """Only names with the prefix are listed."""
        storage = LocalDirectoryStorage(tmp_path)
        asyncio.run(storage.put("2024-05-01-a.csv", b""))
        asyncio.run(storage.put("other.txt", b""))
        assert [o.key for o in asyncio.run(storage.list_objects("2024"))] == ["2024-05-01-a.csv"]

    def test_delete_missing_file_raises(self, tmp_path: Path) -> None:
        """Deleting an absent snapshot is a storage error."""
        with pytest.raises(SnapshotStorageError):
            asyncio.run(LocalDirectoryStorage(tmp_path).delete("absent.csv"))

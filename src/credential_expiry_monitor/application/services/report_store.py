"""Dated CSV snapshots of the credential inventory and their retention."""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta

from ...domain.entities import CredentialRecord
from ...domain.value_objects import CredentialType
from ..exceptions import ConfigurationError, PrerequisiteError, SnapshotStorageError
from ..ports import SnapshotStorage

logger = logging.getLogger(__name__)

SNAPSHOT_COLUMNS = ("Name", "ExpiryDate", "Type", "OwnerName", "OwnerEmail")
SNAPSHOT_DATE_FORMAT = "%Y-%m-%d"
LIST_SEPARATOR = "; "


@dataclass(frozen=True, slots=True)
class ReportStoreConfig:
    """Snapshot naming and retention settings."""

    dataset_name: str = "app-credentials"
    retention_days: int = 10

    def __post_init__(self) -> None:
        """Validate naming and retention."""
        if not self.dataset_name:
            msg = "Snapshot dataset name must not be empty"
            raise ConfigurationError(msg)
        if self.retention_days < 0:
            msg = f"Retention days must be >= 0, got {self.retention_days}"
            raise ConfigurationError(msg)

    @property
    def key_suffix(self) -> str:
        """Common suffix of every snapshot key of this dataset."""
        return f"-{self.dataset_name}.csv"

    def snapshot_key(self, run_date: date) -> str:
        """Key of the snapshot for one run date, e.g. ``2024-05-01-app-credentials.csv``."""
        return f"{run_date.strftime(SNAPSHOT_DATE_FORMAT)}{self.key_suffix}"

    def retention_cutoff(self, run_date: date) -> date:
        """Snapshots last modified strictly before this date are deleted."""
        return run_date - timedelta(days=self.retention_days)


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Outcome of writing one snapshot."""

    key: str
    record_count: int
    written_locally: bool
    uploaded: bool


@dataclass(slots=True)
class RetentionResult:
    """Outcome of a retention sweep across all storages."""

    deleted: int = 0
    retained: int = 0
    failed: int = 0


def serialize_snapshot(records: Iterable[CredentialRecord]) -> bytes:
    """Render records as CSV bytes with the snapshot column layout."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(SNAPSHOT_COLUMNS)
    for record in records:
        writer.writerow(
            [
                record.application_name,
                record.expiry_date.strftime(SNAPSHOT_DATE_FORMAT),
                record.credential_type.value,
                LIST_SEPARATOR.join(record.owner_names),
                LIST_SEPARATOR.join(sorted(record.owner_emails)),
            ]
        )
    return buffer.getvalue().encode("utf-8")


def parse_snapshot(data: bytes) -> list[CredentialRecord]:
    """Parse snapshot CSV bytes back into credential records."""
    reader = csv.DictReader(io.StringIO(data.decode("utf-8")))
    records: list[CredentialRecord] = []
    for row in reader:
        records.append(
            CredentialRecord.create(
                application_name=row["Name"],
                expiry_date=datetime.strptime(row["ExpiryDate"], SNAPSHOT_DATE_FORMAT).date(),
                credential_type=CredentialType.parse(row["Type"]),
                owner_names=_split_list(row["OwnerName"]),
                owner_emails=_split_list(row["OwnerEmail"]),
            )
        )
    return records


def _split_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [part for part in value.split(LIST_SEPARATOR) if part]


class ReportStore:
    """
    Persists the inventory as one snapshot per run date and prunes old ones.

    The snapshot is written to the local working area (when configured) and
    uploaded to durable storage. Retention applies to both.
    """

    def __init__(
        self,
        durable: SnapshotStorage,
        config: ReportStoreConfig | None = None,
        *,
        local: SnapshotStorage | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            durable: Long-term snapshot storage.
            config: Naming and retention settings.
            local: Optional local working area.
        """
        self._durable = durable
        self._local = local
        self._config = config or ReportStoreConfig()

    @property
    def config(self) -> ReportStoreConfig:
        """Naming and retention settings."""
        return self._config

    @property
    def _storages(self) -> list[SnapshotStorage]:
        return [s for s in (self._local, self._durable) if s is not None]

    async def verify(self) -> None:
        """
        Ensure every storage context can be established.

        Raises:
            PrerequisiteError: If a storage is unreachable.
        """
        for storage in self._storages:
            try:
                await storage.verify()
            except SnapshotStorageError as e:
                msg = f"Snapshot storage '{storage.name}' unavailable: {e}"
                raise PrerequisiteError(msg) from e

    async def export(self, records: list[CredentialRecord], run_date: date) -> ExportResult | None:
        """
        Write the run's snapshot.

        Returns:
            ExportResult, or None when there are no records to export.
        """
        if not records:
            logger.info("No credential records collected, snapshot export skipped")
            return None

        key = self._config.snapshot_key(run_date)
        data = serialize_snapshot(records)

        written_locally = False
        if self._local is not None:
            written_locally = await self._put(self._local, key, data)

        uploaded = await self._put(self._durable, key, data)
        if uploaded:
            logger.info("Exported %d credential records to %s", len(records), key)

        return ExportResult(
            key=key,
            record_count=len(records),
            written_locally=written_locally,
            uploaded=uploaded,
        )

    async def enforce_retention(self, run_date: date) -> RetentionResult:
        """Delete snapshots last modified before the retention cutoff."""
        cutoff = self._config.retention_cutoff(run_date)
        result = RetentionResult()

        for storage in self._storages:
            try:
                objects = await storage.list_objects()
            except SnapshotStorageError as e:
                logger.warning("Could not list snapshots in %s: %s", storage.name, e)
                result.failed += 1
                continue

            for obj in objects:
                if not obj.key.endswith(self._config.key_suffix):
                    continue
                if _as_utc_date(obj.last_modified) >= cutoff:
                    result.retained += 1
                    continue
                try:
                    await storage.delete(obj.key)
                except SnapshotStorageError as e:
                    logger.warning("Failed to delete snapshot %s from %s: %s", obj.key, storage.name, e)
                    result.failed += 1
                else:
                    logger.info("Deleted expired snapshot %s from %s", obj.key, storage.name)
                    result.deleted += 1

        return result

    @staticmethod
    async def _put(storage: SnapshotStorage, key: str, data: bytes) -> bool:
        try:
            await storage.put(key, data)
        except SnapshotStorageError as e:
            logger.warning("Failed to write snapshot %s to %s: %s", key, storage.name, e)
            return False
        return True


def _as_utc_date(value: datetime) -> date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(UTC).date()

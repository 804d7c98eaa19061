"""Use case for one unattended credential expiry run."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from ...domain.services import ExpiryClassifier
from ..services import (
    CollectionResult,
    DispatchResult,
    ExportResult,
    InventoryCollector,
    NotificationDispatcher,
    ReportStore,
    RetentionResult,
)

logger = logging.getLogger(__name__)


def _utc_today() -> date:
    return datetime.now(UTC).date()


@dataclass(slots=True)
class RunResult:
    """Result of one run of the pipeline."""

    run_date: date
    collection: CollectionResult
    export: ExportResult | None = None
    retention: RetentionResult | None = None
    events_matched: int = 0
    dispatch: DispatchResult = field(default_factory=DispatchResult)
    dry_run: bool = False
    finished_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def records_collected(self) -> int:
        """Number of credential records collected."""
        return len(self.collection.records)

    @property
    def success(self) -> bool:
        """True when no per-item failure occurred anywhere in the run."""
        return (
            self.collection.failure_count == 0
            and (self.export is None or self.export.uploaded)
            and (self.retention is None or self.retention.failed == 0)
            and self.dispatch.success
        )

    def get_summary(self) -> str:
        """Generate a human-readable summary of the run."""
        if not self.records_collected:
            return "No credentials found"
        return (
            f"{self.records_collected} credentials, {self.events_matched} alerts due: "
            f"{self.dispatch.sent} sent, {self.dispatch.failed} failed, "
            f"{self.dispatch.skipped} without recipients"
        )


class RunExpiryCheck:
    """
    Collect, persist, classify and notify - in that order.

    Snapshot export and classification consume the same collection and do not
    depend on each other. Only prerequisite failures propagate out of execute().
    """

    def __init__(
        self,
        collector: InventoryCollector,
        report_store: ReportStore,
        classifier: ExpiryClassifier,
        dispatcher: NotificationDispatcher,
        *,
        dry_run: bool = False,
        clock: Callable[[], date] = _utc_today,
    ) -> None:
        """
        Initialize the use case.

        Args:
            collector: Builds credential records from the directory.
            report_store: Writes snapshots and applies retention.
            classifier: Decides which records trigger an alert.
            dispatcher: Sends alert emails.
            dry_run: Only reported in the result; the dispatcher suppresses sends.
            clock: Returns the run date when none is given to execute().
        """
        self._collector = collector
        self._report_store = report_store
        self._classifier = classifier
        self._dispatcher = dispatcher
        self._dry_run = dry_run
        self._clock = clock

    async def execute(self, run_date: date | None = None) -> RunResult:
        """
        Execute one run.

        Returns:
            RunResult with counters for every stage.

        Raises:
            PrerequisiteError: If storage or the application list is unavailable.
        """
        run_date = run_date or self._clock()
        logger.info("Starting credential expiry run for %s", run_date.isoformat())

        await self._report_store.verify()
        collection = await self._collector.collect()
        result = RunResult(run_date=run_date, collection=collection, dry_run=self._dry_run)

        if not collection.records:
            logger.info("No credentials found, nothing to export or notify")
            return result

        result.export = await self._report_store.export(collection.records, run_date)
        result.retention = await self._report_store.enforce_retention(run_date)
        if result.retention.deleted or result.retention.failed:
            logger.info(
                "Retention: %d snapshots deleted, %d failures",
                result.retention.deleted,
                result.retention.failed,
            )

        events = self._classifier.classify_all(collection.records, run_date)
        result.events_matched = len(events)
        if not events:
            logger.info("No credentials match an alert threshold today")
        else:
            result.dispatch = await self._dispatcher.dispatch(events)

        logger.info("Run complete: %s", result.get_summary())
        return result

"""Domain service deciding which credentials trigger an alert today."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from ..entities import CredentialRecord, NotificationEvent
from ..value_objects import AlertThresholds


class ExpiryClassifier:
    """
    Stateless threshold classifier.

    A credential produces an event when its whole-day countdown equals one of
    the configured thresholds. Nothing is remembered between calls, so
    repeated runs on the same day yield the same decisions.
    """

    def __init__(self, thresholds: AlertThresholds | None = None) -> None:
        """Initialize classifier with the alert threshold set."""
        self._thresholds = thresholds or AlertThresholds()

    @property
    def thresholds(self) -> AlertThresholds:
        """The alert threshold set in use."""
        return self._thresholds

    def classify(self, record: CredentialRecord, run_date: date) -> NotificationEvent | None:
        """
        Classify one record against the run date.

        Args:
            record: Credential record to classify.
            run_date: Calendar date of the current run.

        Returns:
            A NotificationEvent if the days remaining is a threshold, else None.
        """
        days_remaining = record.days_remaining(run_date)
        if days_remaining not in self._thresholds:
            return None
        return NotificationEvent(record=record, run_date=run_date, days_remaining=days_remaining)

    def classify_all(
        self, records: Iterable[CredentialRecord], run_date: date
    ) -> list[NotificationEvent]:
        """Classify every record, keeping only those that produce an event."""
        events: list[NotificationEvent] = []
        for record in records:
            event = self.classify(record, run_date)
            if event is not None:
                events.append(event)
        return events

"""Notification event - a credential whose countdown hit an alert threshold."""

from dataclasses import dataclass
from datetime import date

from .credential_record import CredentialRecord


@dataclass(frozen=True, slots=True)
class NotificationEvent:
    """
    Ephemeral alert decision for one credential on one run date.

    Never persisted; re-derived on every run from the record and the date.
    """

    record: CredentialRecord
    run_date: date
    days_remaining: int

    @property
    def recipients(self) -> list[str]:
        """Resolved recipient addresses for this event."""
        return self.record.recipients

"""Credential record entity - one row of the credential inventory."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Self

from ..exceptions import InvalidCredentialRecordError
from ..value_objects import CredentialType

PORTAL_CREDENTIALS_URL = (
    "https://portal.azure.com/#view/Microsoft_AAD_RegisteredApps"
    "/ApplicationMenuBlade/~/Credentials/appId/{app_id}"
)


@dataclass(frozen=True, slots=True)
class CredentialRecord:
    """
    A single certificate or secret belonging to a directory application.

    One record exists per credential, not per application. The expiry date is
    mandatory; owner names and emails may be empty. A record without any owner
    email is still part of the inventory but never produces a notification.
    """

    application_name: str
    expiry_date: date
    credential_type: CredentialType
    owner_names: tuple[str, ...] = ()
    owner_emails: frozenset[str] = field(default_factory=frozenset)
    application_id: str | None = None

    def __post_init__(self) -> None:
        """Enforce required fields and normalize collections."""
        if not self.application_name:
            msg = "Credential record requires an application name"
            raise InvalidCredentialRecordError(msg)
        if not isinstance(self.expiry_date, date):
            msg = f"Credential record for {self.application_name!r} requires an expiry date"
            raise InvalidCredentialRecordError(msg)
        if isinstance(self.expiry_date, datetime):
            object.__setattr__(self, "expiry_date", self.expiry_date.date())
        if not isinstance(self.credential_type, CredentialType):
            object.__setattr__(self, "credential_type", CredentialType.parse(str(self.credential_type)))
        object.__setattr__(self, "owner_names", tuple(self.owner_names))
        object.__setattr__(self, "owner_emails", frozenset(self.owner_emails))

    def days_remaining(self, run_date: date) -> int:
        """Whole days from the run date to the expiry date (0 on the expiry day)."""
        if isinstance(run_date, datetime):
            run_date = run_date.date()
        return (self.expiry_date - run_date).days

    @property
    def owner_display(self) -> str:
        """Owner names joined for display."""
        return ", ".join(self.owner_names)

    @property
    def recipients(self) -> list[str]:
        """Owner emails trimmed of whitespace, empties dropped, sorted."""
        return sorted({e.strip() for e in self.owner_emails if e and e.strip()})

    @property
    def portal_url(self) -> str | None:
        """URL to manage this application's credentials in the Azure portal."""
        if not self.application_id:
            return None
        return PORTAL_CREDENTIALS_URL.format(app_id=self.application_id)

    @classmethod
    def create(
        cls,
        *,
        application_name: str,
        expiry_date: date,
        credential_type: CredentialType,
        owner_names: Iterable[str] = (),
        owner_emails: Iterable[str] = (),
        application_id: str | None = None,
    ) -> Self:
        """Factory method to create a record from collected directory data."""
        return cls(
            application_name=application_name,
            expiry_date=expiry_date,
            credential_type=credential_type,
            owner_names=tuple(owner_names),
            owner_emails=frozenset(owner_emails),
            application_id=application_id,
        )

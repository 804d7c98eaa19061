"""Collects the credential inventory from the identity directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC

from ...domain.entities import CredentialRecord
from ...domain.exceptions import DomainError
from ..exceptions import DirectoryError, PrerequisiteError
from ..ports import ApplicationRef, DirectoryService, PrincipalRef, RawCredential

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CollectionResult:
    """Flat list of credential records plus the applications that failed."""

    records: list[CredentialRecord] = field(default_factory=list)
    applications_scanned: int = 0
    failed_applications: list[str] = field(default_factory=list)

    @property
    def failure_count(self) -> int:
        """Number of applications whose fetch failed."""
        return len(self.failed_applications)


class InventoryCollector:
    """
    Turns directory applications into credential records.

    A failure while reading one application's credentials or owners is logged
    and that application is skipped; the rest of the collection continues.
    """

    def __init__(self, directory: DirectoryService) -> None:
        """Initialize the collector with a directory port."""
        self._directory = directory

    async def collect(self) -> CollectionResult:
        """
        Collect every credential with an expiry date.

        Returns:
            CollectionResult with one record per credential.

        Raises:
            PrerequisiteError: If the application list itself cannot be read.
        """
        try:
            applications = await self._directory.list_applications()
        except DirectoryError as e:
            msg = f"Unable to list applications: {e}"
            raise PrerequisiteError(msg) from e

        result = CollectionResult(applications_scanned=len(applications))

        for application in applications:
            try:
                raw_credentials = await self._directory.get_credentials(application)
                owners = await self._directory.get_owners(application) if raw_credentials else []
                records = self._build_records(application, raw_credentials, owners)
            except (DirectoryError, DomainError) as e:
                logger.warning("Skipping application %s: %s", application.display_name, e)
                result.failed_applications.append(application.display_name)
                continue

            result.records.extend(records)

        logger.info(
            "Collected %d credentials from %d applications (%d failed)",
            len(result.records),
            result.applications_scanned,
            result.failure_count,
        )
        return result

    def _build_records(
        self,
        application: ApplicationRef,
        raw_credentials: list[RawCredential],
        owners: list[PrincipalRef],
    ) -> list[CredentialRecord]:
        """Map one application's raw credentials to records sharing its owners."""
        owner_names = [o.display_name for o in owners if o.display_name]
        owner_emails = self.resolve_owner_emails(owners)

        records: list[CredentialRecord] = []
        for raw in raw_credentials:
            if raw.end_date_time is None:
                logger.debug(
                    "Credential %s of %s has no expiry date",
                    raw.key_id or "unknown",
                    application.display_name,
                )
                continue

            expiry = raw.end_date_time
            if expiry.tzinfo is not None:
                expiry = expiry.astimezone(UTC)

            records.append(
                CredentialRecord.create(
                    application_name=application.display_name,
                    expiry_date=expiry.date(),
                    credential_type=raw.credential_type,
                    owner_names=owner_names,
                    owner_emails=owner_emails,
                    application_id=application.app_id,
                )
            )
        return records

    @staticmethod
    def resolve_owner_emails(owners: list[PrincipalRef]) -> set[str]:
        """Emails of user and group owners; other principal kinds have no mailbox."""
        return {
            owner.email.strip()
            for owner in owners
            if owner.kind.has_mailbox and owner.email and owner.email.strip()
        }

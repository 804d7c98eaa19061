"""Entra ID implementation of the directory port."""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime
from typing import Any

import httpx

from ....application.exceptions import DirectoryError
from ....application.ports import ApplicationRef, PrincipalRef, RawCredential
from ....domain.value_objects import CredentialType, PrincipalKind
from .graph_client import GraphClient, GraphClientConfig

logger = logging.getLogger(__name__)

# Graph may return 7 fractional digits; fromisoformat accepts at most 6
_FRACTION = re.compile(r"(\.\d{6})\d+")

# Raised while fetching or mapping a Graph response
_READ_ERRORS = (httpx.HTTPError, RuntimeError, ValueError, TypeError, KeyError, AttributeError)


class EntraIdDirectoryService:
    """
    Directory port backed by Microsoft Graph.

    Reads application registrations, their key/password credentials and their
    owners. Never writes to the directory.
    """

    def __init__(self, config: GraphClientConfig | None = None, *, client: GraphClient | None = None) -> None:
        """
        Initialize the directory adapter.

        Args:
            config: Graph API client configuration.
            client: Pre-built Graph client (takes precedence over config).
        """
        if client is None:
            if config is None:
                msg = "Either config or client is required"
                raise ValueError(msg)
            client = GraphClient(config)
        self._client = client

    async def list_applications(self) -> list[ApplicationRef]:
        """List all application registrations."""
        try:
            raw_apps = await self._client.get_applications()
            return [
                ApplicationRef(
                    object_id=app.get("id", ""),
                    display_name=app.get("displayName") or "Unknown",
                    app_id=app.get("appId"),
                )
                for app in raw_apps
            ]
        except _READ_ERRORS as e:
            msg = f"Failed to list applications from Entra ID: {e}"
            raise DirectoryError(msg) from e

    async def get_credentials(self, application: ApplicationRef) -> list[RawCredential]:
        """Fetch certificates (key credentials) and secrets (password credentials)."""
        try:
            data = await self._client.get_application_credentials(application.object_id)
            credentials = [
                self._map_credential(raw, CredentialType.CERTIFICATE)
                for raw in data.get("keyCredentials") or []
            ]
            credentials.extend(
                self._map_credential(raw, CredentialType.SECRET)
                for raw in data.get("passwordCredentials") or []
            )
        except _READ_ERRORS as e:
            msg = f"Failed to read credentials of {application.display_name}: {e}"
            raise DirectoryError(msg) from e
        return credentials

    async def get_owners(self, application: ApplicationRef) -> list[PrincipalRef]:
        """Fetch owners and classify them by principal kind."""
        try:
            raw_owners = await self._client.get_application_owners(application.object_id)
            return [self._map_owner(raw) for raw in raw_owners]
        except _READ_ERRORS as e:
            msg = f"Failed to read owners of {application.display_name}: {e}"
            raise DirectoryError(msg) from e

    def _map_credential(self, raw: dict[str, Any], credential_type: CredentialType) -> RawCredential:
        """Map raw Graph API credential data to a port record."""
        return RawCredential(
            credential_type=credential_type,
            end_date_time=self._parse_datetime(raw.get("endDateTime")),
            key_id=raw.get("keyId"),
            display_name=raw.get("displayName"),
        )

    @staticmethod
    def _map_owner(raw: dict[str, Any]) -> PrincipalRef:
        kind = PrincipalKind.from_odata_type(raw.get("@odata.type"))
        return PrincipalRef(
            object_id=raw.get("id", ""),
            kind=kind,
            display_name=raw.get("displayName"),
            email=raw.get("mail") if kind.has_mailbox else None,
        )

    @staticmethod
    def _parse_datetime(dt_string: str | None) -> datetime | None:
        """Parse ISO datetime string to datetime object."""
        if not dt_string:
            return None
        try:
            dt_string = _FRACTION.sub(r"\1", dt_string.replace("Z", "+00:00"))
            dt = datetime.fromisoformat(dt_string)
            # Ensure timezone-aware
            return dt if dt.tzinfo else dt.replace(tzinfo=UTC)
        except ValueError:
            logger.warning("Failed to parse datetime: %s", dt_string)
            return None

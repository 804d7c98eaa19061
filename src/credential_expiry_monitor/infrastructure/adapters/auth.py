"""App-only token acquisition for Microsoft Graph and Azure Storage."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import ClassVar, Protocol

import msal

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClientCredentials:
    """Entra ID app registration used by this service."""

    tenant_id: str
    client_id: str
    client_secret: str


class TokenProvider(Protocol):
    """Anything that can hand out a bearer token."""

    async def acquire_token(self) -> str:
        """Return a valid access token."""
        ...


class MsalTokenProvider:
    """
    Client credentials flow for a single resource scope.

    Tokens are cached and refreshed 5 minutes before they expire.
    """

    AUTHORITY_BASE: ClassVar[str] = "https://login.microsoftonline.com"

    def __init__(self, credentials: ClientCredentials, scope: str) -> None:
        """Initialize the provider for one scope."""
        self._credentials = credentials
        self._scopes = [scope]
        self._access_token: str | None = None
        self._token_expiry: datetime | None = None
        self._msal_app: msal.ConfidentialClientApplication | None = None

    def _get_msal_app(self) -> msal.ConfidentialClientApplication:
        """Get or create MSAL application instance."""
        if self._msal_app is None:
            authority = f"{self.AUTHORITY_BASE}/{self._credentials.tenant_id}"
            self._msal_app = msal.ConfidentialClientApplication(
                client_id=self._credentials.client_id,
                client_credential=self._credentials.client_secret,
                authority=authority,
            )
        return self._msal_app

    async def acquire_token(self) -> str:
        """Acquire access token using client credentials flow."""
        if self._access_token and self._token_expiry and datetime.now(UTC) < self._token_expiry:
            return self._access_token

        app = self._get_msal_app()
        result = app.acquire_token_for_client(scopes=self._scopes)

        if "access_token" not in result:
            error = result.get("error_description", result.get("error", "Unknown error"))
            msg = f"Failed to acquire access token for {self._scopes[0]}: {error}"
            raise RuntimeError(msg)

        self._access_token = result["access_token"]
        expires_in = result.get("expires_in", 3600)
        # Refresh 5 minutes before expiry
        self._token_expiry = datetime.now(UTC) + timedelta(seconds=expires_in - 300)
        logger.debug("Acquired token for %s", self._scopes[0])

        return self._access_token

"""Microsoft Graph API client for Entra ID."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar

import httpx

from ..auth import ClientCredentials, MsalTokenProvider, TokenProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GraphClientConfig:
    """Configuration for Microsoft Graph API client."""

    tenant_id: str
    client_id: str
    client_secret: str
    timeout: float = 30.0

    @property
    def credentials(self) -> ClientCredentials:
        """App credentials for token acquisition."""
        return ClientCredentials(self.tenant_id, self.client_id, self.client_secret)


class GraphClient:
    """
    Async client for Microsoft Graph API.

    Handles authentication and paginated requests to the Graph API.
    """

    GRAPH_BASE_URL: ClassVar[str] = "https://graph.microsoft.com/v1.0"
    SCOPE: ClassVar[str] = "https://graph.microsoft.com/.default"

    def __init__(
        self,
        config: GraphClientConfig,
        *,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the Graph client.

        Args:
            config: Tenant, app credentials and timeout.
            token_provider: Overrides the MSAL token provider.
            transport: Overrides the httpx transport.
        """
        self._config = config
        self._tokens = token_provider or MsalTokenProvider(config.credentials, self.SCOPE)
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._config.timeout, transport=self._transport)

    async def _headers(self) -> dict[str, str]:
        token = await self._tokens.acquire_token()
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    def _url(self, endpoint: str) -> str:
        # Handle both relative and absolute URLs
        return endpoint if endpoint.startswith("http") else f"{self.GRAPH_BASE_URL}{endpoint}"

    async def get_applications(self) -> list[dict[str, Any]]:
        """
        Retrieve all application registrations.

        Returns:
            List of application dictionaries from Graph API.
        """
        logger.info("Fetching application registrations from Entra ID...")
        applications = await self._get_all_pages("/applications?$select=id,appId,displayName")
        logger.info("Found %d application registrations", len(applications))
        return applications

    async def get_application_credentials(self, object_id: str) -> dict[str, Any]:
        """Retrieve the key and password credentials of one application."""
        return await self._get(
            f"/applications/{object_id}?$select=keyCredentials,passwordCredentials"
        )

    async def get_application_owners(self, object_id: str) -> list[dict[str, Any]]:
        """Retrieve the owner directory objects of one application."""
        return await self._get_all_pages(f"/applications/{object_id}/owners")

    async def post(self, endpoint: str, payload: dict[str, Any]) -> httpx.Response:
        """POST a JSON payload and return the response."""
        async with self._client() as client:
            response = await client.post(self._url(endpoint), headers=await self._headers(), json=payload)
            response.raise_for_status()
            return response

    async def _get(self, endpoint: str) -> dict[str, Any]:
        async with self._client() as client:
            response = await client.get(self._url(endpoint), headers=await self._headers())
            response.raise_for_status()
            return response.json()

    async def _get_all_pages(self, endpoint: str) -> list[dict[str, Any]]:
        """
        Retrieve all pages from a paginated Graph API endpoint.

        Args:
            endpoint: The API endpoint path.

        Returns:
            Combined list of all results across pages.
        """
        results: list[dict[str, Any]] = []
        url: str | None = endpoint

        async with self._client() as client:
            while url:
                response = await client.get(self._url(url), headers=await self._headers())
                response.raise_for_status()
                data = response.json()

                results.extend(data.get("value", []))
                url = data.get("@odata.nextLink")

        return results

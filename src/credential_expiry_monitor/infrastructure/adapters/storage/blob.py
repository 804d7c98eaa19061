"""Azure Blob Storage snapshot adapter using the REST API."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import UTC
from email.utils import formatdate, parsedate_to_datetime
from typing import ClassVar
from urllib.parse import quote

import httpx

from ....application.exceptions import SnapshotStorageError
from ....application.ports import StoredObject
from ..auth import ClientCredentials, MsalTokenProvider, TokenProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BlobStorageConfig:
    """Location of the snapshot container."""

    account_url: str  # e.g. https://myaccount.blob.core.windows.net
    container: str
    tenant_id: str = ""
    client_id: str = ""
    client_secret: str = ""
    timeout: float = 30.0

    @property
    def container_url(self) -> str:
        """Base URL of the container."""
        return f"{self.account_url.rstrip('/')}/{self.container}"

    @property
    def credentials(self) -> ClientCredentials:
        """App credentials for token acquisition."""
        return ClientCredentials(self.tenant_id, self.client_id, self.client_secret)


class AzureBlobSnapshotStorage:
    """
    Snapshot storage port backed by one blob container.

    Authenticates with an Entra ID bearer token; the app registration needs
    the Storage Blob Data Contributor role on the container.
    """

    API_VERSION: ClassVar[str] = "2021-08-06"
    SCOPE: ClassVar[str] = "https://storage.azure.com/.default"

    def __init__(
        self,
        config: BlobStorageConfig,
        *,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the blob adapter."""
        self._config = config
        self._tokens = token_provider or MsalTokenProvider(config.credentials, self.SCOPE)
        self._transport = transport

    @property
    def name(self) -> str:
        """Short label used in log messages."""
        return f"blob:{self._config.container}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._config.timeout, transport=self._transport)

    async def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        token = await self._tokens.acquire_token()
        headers = {
            "Authorization": f"Bearer {token}",
            "x-ms-version": self.API_VERSION,
            "x-ms-date": formatdate(usegmt=True),
        }
        if extra:
            headers.update(extra)
        return headers

    def _blob_url(self, key: str) -> str:
        return f"{self._config.container_url}/{quote(key)}"

    async def verify(self) -> None:
        """Read the container properties to prove access."""
        try:
            async with self._client() as client:
                response = await client.get(
                    self._config.container_url,
                    params={"restype": "container"},
                    headers=await self._headers(),
                )
                response.raise_for_status()
        except (httpx.HTTPError, RuntimeError) as e:
            msg = f"Cannot access container {self._config.container_url}: {e}"
            raise SnapshotStorageError(msg) from e

    async def put(self, key: str, data: bytes) -> None:
        """Upload a block blob, replacing any existing one."""
        try:
            async with self._client() as client:
                response = await client.put(
                    self._blob_url(key),
                    content=data,
                    headers=await self._headers(
                        {"x-ms-blob-type": "BlockBlob", "Content-Type": "text/csv; charset=utf-8"}
                    ),
                )
                response.raise_for_status()
        except (httpx.HTTPError, RuntimeError) as e:
            msg = f"Upload of {key} failed: {e}"
            raise SnapshotStorageError(msg) from e
        logger.debug("Uploaded %s (%d bytes)", key, len(data))

    async def list_objects(self, prefix: str = "") -> list[StoredObject]:
        """List blobs by prefix, following continuation markers."""
        objects: list[StoredObject] = []
        marker: str | None = None

        try:
            async with self._client() as client:
                while True:
                    params = {"restype": "container", "comp": "list"}
                    if prefix:
                        params["prefix"] = prefix
                    if marker:
                        params["marker"] = marker

                    response = await client.get(
                        self._config.container_url, params=params, headers=await self._headers()
                    )
                    response.raise_for_status()
                    page, marker = self._parse_listing(response.content)
                    objects.extend(page)
                    if not marker:
                        break
        except (httpx.HTTPError, RuntimeError, ET.ParseError, ValueError) as e:
            msg = f"Listing {self._config.container_url} failed: {e}"
            raise SnapshotStorageError(msg) from e

        return objects

    async def delete(self, key: str) -> None:
        """Delete one blob."""
        try:
            async with self._client() as client:
                response = await client.delete(self._blob_url(key), headers=await self._headers())
                response.raise_for_status()
        except (httpx.HTTPError, RuntimeError) as e:
            msg = f"Delete of {key} failed: {e}"
            raise SnapshotStorageError(msg) from e

    @staticmethod
    def _parse_listing(body: bytes) -> tuple[list[StoredObject], str | None]:
        """Parse an EnumerationResults document into objects and the next marker."""
        root = ET.fromstring(body)
        objects: list[StoredObject] = []
        for blob in root.iter("Blob"):
            name = blob.findtext("Name")
            modified = blob.findtext("Properties/Last-Modified")
            if not name or not modified:
                continue
            last_modified = parsedate_to_datetime(modified)
            if last_modified.tzinfo is None:
                last_modified = last_modified.replace(tzinfo=UTC)
            objects.append(StoredObject(key=name, last_modified=last_modified))
        return objects, root.findtext("NextMarker") or None

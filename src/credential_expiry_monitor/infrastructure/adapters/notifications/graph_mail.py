"""Email transport using Microsoft Graph API sendMail."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from ....application.exceptions import NotificationError
from ..entra_id.graph_client import GraphClient, GraphClientConfig
from .base import BaseEmailTransport

if TYPE_CHECKING:
    from ....application.ports import EmailMessage


@dataclass(frozen=True, slots=True)
class GraphMailConfig:
    """Microsoft Graph email transport configuration."""

    tenant_id: str = ""
    client_id: str = ""
    client_secret: str = ""
    save_to_sent_items: bool = False

    @property
    def graph_config(self) -> GraphClientConfig:
        """Graph client configuration for the sending app."""
        return GraphClientConfig(
            tenant_id=self.tenant_id,
            client_id=self.client_id,
            client_secret=self.client_secret,
        )


class GraphMailTransport(BaseEmailTransport):
    """
    Send email through the sender's mailbox via Microsoft Graph.

    The app registration needs the Mail.Send application permission.
    """

    def __init__(self, config: GraphMailConfig, *, client: GraphClient | None = None) -> None:
        """Initialize the Graph mail transport."""
        super().__init__()
        self._config = config
        self._client = client or GraphClient(config.graph_config)

    def is_configured(self) -> bool:
        """Check if Graph email is properly configured."""
        return (
            bool(self._config.tenant_id)
            and bool(self._config.client_id)
            and bool(self._config.client_secret)
        )

    async def send(self, message: EmailMessage) -> bool:
        """Send the message via Graph API."""
        if not self.is_configured():
            self._logger.warning("Graph mail transport not configured")
            return False

        payload = self.build_payload(message)
        if not payload["message"]["toRecipients"]:
            self._logger.warning("No recipients for '%s'", message.subject)
            return False

        try:
            await self._client.post(f"/users/{quote(message.from_address, safe='@')}/sendMail", payload)
        except (httpx.HTTPError, RuntimeError) as e:
            msg = f"Graph sendMail failed for '{message.subject}': {e}"
            raise NotificationError(msg) from e

        self._logger.info("Graph email sent to %s", ", ".join(message.to_addresses))
        return True

    def build_payload(self, message: EmailMessage) -> dict[str, Any]:
        """Build the Graph API email message payload."""
        return {
            "message": {
                "subject": message.subject,
                "body": {
                    "contentType": "HTML",
                    "content": message.html_body,
                },
                "from": {
                    "emailAddress": {"address": message.from_address, "name": message.from_name},
                },
                "toRecipients": [
                    {"emailAddress": {"address": addr}} for addr in self.clean_recipients(message)
                ],
            },
            "saveToSentItems": self._config.save_to_sent_items,
        }

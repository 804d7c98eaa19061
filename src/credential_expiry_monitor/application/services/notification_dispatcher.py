"""Sends one email per notification event to the credential's owners."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ...domain.entities import NotificationEvent
from ..ports import EmailMessage, EmailTransport
from .notification_renderer import NotificationRenderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SenderIdentity:
    """From address and display name of outbound alerts."""

    address: str
    name: str = "Credential Expiry Monitor"


@dataclass(slots=True)
class DispatchResult:
    """Per-run dispatch counters."""

    sent: int = 0
    failed: int = 0
    skipped: int = 0
    suppressed: int = 0

    @property
    def success(self) -> bool:
        """True when no submission failed."""
        return self.failed == 0


class NotificationDispatcher:
    """
    Renders and submits alerts, one event at a time.

    Events without a resolvable recipient are skipped with a warning. A
    transport failure is counted and the next event is still processed.
    """

    def __init__(
        self,
        transport: EmailTransport,
        sender: SenderIdentity,
        *,
        renderer: NotificationRenderer | None = None,
        dry_run: bool = False,
    ) -> None:
        """
        Initialize the dispatcher.

        Args:
            transport: Email transport adapter.
            sender: From identity for every message.
            renderer: Subject and body renderer.
            dry_run: If True, log messages instead of sending them.
        """
        self._transport = transport
        self._sender = sender
        self._renderer = renderer or NotificationRenderer()
        self._dry_run = dry_run

    def build_message(self, event: NotificationEvent) -> EmailMessage | None:
        """Render the message for an event, or None when nobody can receive it."""
        recipients = event.recipients
        if not recipients:
            return None
        return EmailMessage(
            from_address=self._sender.address,
            from_name=self._sender.name,
            to_addresses=tuple(recipients),
            subject=self._renderer.subject(event),
            html_body=self._renderer.html_body(event),
        )

    async def dispatch(self, events: Iterable[NotificationEvent]) -> DispatchResult:
        """Send every event and return the counters."""
        result = DispatchResult()

        for event in events:
            message = self.build_message(event)
            if message is None:
                logger.warning(
                    "No owner email for %s %s of %s, alert skipped",
                    event.record.credential_type,
                    event.record.expiry_date,
                    event.record.application_name,
                )
                result.skipped += 1
                continue

            if self._dry_run:
                logger.info("DRY RUN: Would send '%s' to %s", message.subject, ", ".join(message.to_addresses))
                result.suppressed += 1
                continue

            try:
                delivered = await self._transport.send(message)
            except Exception:
                logger.exception("Error sending '%s'", message.subject)
                result.failed += 1
                continue

            if delivered:
                logger.info("Sent '%s' to %s", message.subject, ", ".join(message.to_addresses))
                result.sent += 1
            else:
                logger.warning("Transport rejected '%s'", message.subject)
                result.failed += 1

        return result

"""Port for email delivery - driven/secondary port."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class EmailMessage:
    """A rendered HTML email ready for submission."""

    from_address: str
    from_name: str
    to_addresses: tuple[str, ...]
    subject: str
    html_body: str


class EmailTransport(Protocol):
    """
    Port for submitting email.

    This is a driven (secondary) port. Delivery is best effort; there is no
    retry.
    """

    async def send(self, message: EmailMessage) -> bool:
        """
        Submit a message to all of its recipients.

        Returns:
            True if the transport accepted the message.

        Raises:
            NotificationError: If submission fails.
        """
        ...

    def is_configured(self) -> bool:
        """
        Check if this transport is properly configured.

        Returns:
            True if the transport is ready to send.
        """
        ...

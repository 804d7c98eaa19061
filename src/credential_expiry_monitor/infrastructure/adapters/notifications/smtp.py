"""Email transport using SMTP."""

from __future__ import annotations

import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import TYPE_CHECKING

from ....application.exceptions import NotificationError
from .base import BaseEmailTransport

if TYPE_CHECKING:
    from ....application.ports import EmailMessage


@dataclass(frozen=True, slots=True)
class SmtpConfig:
    """SMTP transport configuration."""

    server: str = ""
    port: int = 587
    username: str = ""
    password: str = ""
    use_tls: bool = True
    timeout: float = 30.0


class SmtpEmailTransport(BaseEmailTransport):
    """Send email via an SMTP relay."""

    def __init__(self, config: SmtpConfig) -> None:
        """Initialize the SMTP transport."""
        super().__init__()
        self._config = config

    def is_configured(self) -> bool:
        """Check if SMTP is properly configured."""
        return bool(self._config.server)

    async def send(self, message: EmailMessage) -> bool:
        """Send the message over SMTP."""
        if not self.is_configured():
            self._logger.warning("SMTP transport not configured")
            return False

        recipients = self.clean_recipients(message)
        if not recipients:
            self._logger.warning("No recipients for '%s'", message.subject)
            return False

        mime = self.build_message(message, recipients)
        try:
            with smtplib.SMTP(self._config.server, self._config.port, timeout=self._config.timeout) as server:
                if self._config.use_tls:
                    server.starttls()
                if self._config.username and self._config.password:
                    server.login(self._config.username, self._config.password)
                server.sendmail(message.from_address, recipients, mime.as_string())
        except (smtplib.SMTPException, OSError) as e:
            msg = f"SMTP delivery failed for '{message.subject}': {e}"
            raise NotificationError(msg) from e

        self._logger.info("Email sent to %s", ", ".join(recipients))
        return True

    @staticmethod
    def build_message(message: EmailMessage, recipients: list[str]) -> MIMEMultipart:
        """Build the MIME message."""
        mime = MIMEMultipart("alternative")
        mime["Subject"] = message.subject
        mime["From"] = formataddr((message.from_name, message.from_address))
        mime["To"] = ", ".join(recipients)
        mime.attach(MIMEText(message.html_body, "html", "utf-8"))
        return mime

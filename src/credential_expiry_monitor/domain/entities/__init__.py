"""Domain entities - Objects with identity and lifecycle."""

from .credential_record import CredentialRecord
from .notification_event import NotificationEvent

__all__ = [
    "CredentialRecord",
    "NotificationEvent",
]

"""Domain value objects - Immutable objects defined by their attributes."""

from .credential_type import CredentialType
from .notification_level import NotificationLevel
from .principal_kind import PrincipalKind
from .thresholds import DEFAULT_ALERT_THRESHOLD_DAYS, AlertThresholds

__all__ = [
    "DEFAULT_ALERT_THRESHOLD_DAYS",
    "AlertThresholds",
    "CredentialType",
    "NotificationLevel",
    "PrincipalKind",
]

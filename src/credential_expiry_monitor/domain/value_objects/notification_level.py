"""Notification level value object."""

from enum import StrEnum, auto

CRITICAL_DAYS = 7
WARNING_DAYS = 30


class NotificationLevel(StrEnum):
    """Urgency of an alert, derived from the days remaining."""

    CRITICAL = auto()
    WARNING = auto()
    INFO = auto()

    @classmethod
    def for_days_remaining(cls, days_remaining: int) -> "NotificationLevel":
        """Map a countdown value to an urgency level."""
        if days_remaining <= CRITICAL_DAYS:
            return cls.CRITICAL
        if days_remaining <= WARNING_DAYS:
            return cls.WARNING
        return cls.INFO

    @property
    def color_hex(self) -> str:
        """Get hex color code for this level."""
        match self:
            case NotificationLevel.CRITICAL:
                return "#dc3545"
            case NotificationLevel.WARNING:
                return "#ffc107"
            case NotificationLevel.INFO:
                return "#17a2b8"

"""Alert threshold set value object."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from ..exceptions import InvalidThresholdsError

DEFAULT_ALERT_THRESHOLD_DAYS: tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7, 15, 30, 89, 90)


@dataclass(frozen=True, slots=True)
class AlertThresholds:
    """
    Days-remaining values on which an alert fires.

    Stored sorted and deduplicated. Negative values are accepted so that a
    deployment can opt into alerting on already-expired credentials.
    """

    days: tuple[int, ...] = field(default=DEFAULT_ALERT_THRESHOLD_DAYS)

    def __post_init__(self) -> None:
        """Normalize and validate the threshold values."""
        if not self.days:
            msg = "Alert threshold set must contain at least one value"
            raise InvalidThresholdsError(msg)
        if any(isinstance(d, bool) or not isinstance(d, int) for d in self.days):
            msg = f"Alert thresholds must be integers: {self.days!r}"
            raise InvalidThresholdsError(msg)
        object.__setattr__(self, "days", tuple(sorted(set(self.days))))

    def __contains__(self, days_remaining: object) -> bool:
        return days_remaining in self.days

    def __iter__(self) -> Iterator[int]:
        return iter(self.days)

    def __len__(self) -> int:
        return len(self.days)

    @classmethod
    def of(cls, values: Iterable[int]) -> AlertThresholds:
        """Build a threshold set from any iterable of integers."""
        return cls(days=tuple(values))

    @classmethod
    def parse(cls, raw: str) -> AlertThresholds:
        """Parse a comma-separated list such as ``"1,2,3,7,30"``."""
        parts = [p.strip() for p in raw.split(",") if p.strip()]
        try:
            values = tuple(int(p) for p in parts)
        except ValueError as e:
            msg = f"Invalid alert threshold list: {raw!r}"
            raise InvalidThresholdsError(msg) from e
        return cls(days=values)

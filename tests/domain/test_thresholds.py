"""Tests for AlertThresholds value object."""

from __future__ import annotations

import pytest

from credential_expiry_monitor.domain.exceptions import InvalidThresholdsError
from credential_expiry_monitor.domain.value_objects import DEFAULT_ALERT_THRESHOLD_DAYS, AlertThresholds


class TestAlertThresholds:
    """Tests for AlertThresholds value object."""

    def test_default_thresholds(self) -> None:
        """Default set is 1-7, 15, 30, 89 and 90 days."""
        thresholds = AlertThresholds()
        assert thresholds.days == (1, 2, 3, 4, 5, 6, 7, 15, 30, 89, 90)
        assert thresholds.days == DEFAULT_ALERT_THRESHOLD_DAYS

    def test_values_are_sorted_and_deduplicated(self) -> None:
        """Custom values are normalized."""
        thresholds = AlertThresholds.of([30, 7, 7, 1])
        assert thresholds.days == (1, 7, 30)
        assert len(thresholds) == 3
        assert list(thresholds) == [1, 7, 30]

    def test_membership(self) -> None:
        """Membership is exact integer matching."""
        thresholds = AlertThresholds()
        assert 7 in thresholds
        assert 8 not in thresholds
        assert 0 not in thresholds
        assert -3 not in thresholds

    def test_empty_set_invalid(self) -> None:
        """At least one threshold is required."""
        with pytest.raises(InvalidThresholdsError, match="at least one"):
            AlertThresholds(days=())

    def test_non_integer_invalid(self) -> None:
        """Thresholds must be integers."""
        with pytest.raises(InvalidThresholdsError, match="integers"):
            AlertThresholds(days=(1.5,))  # type: ignore[arg-type]

    def test_negative_values_allowed_for_overdue_alerts(self) -> None:
        """An explicit negative value opts into alerting after expiry."""
        thresholds = AlertThresholds.of([-1, 0, 7])
        assert -1 in thresholds

    def test_parse_comma_separated(self) -> None:
        """Environment style lists are parsed with whitespace tolerated."""
        thresholds = AlertThresholds.parse(" 90, 30 ,7,,1 ")
        assert thresholds.days == (1, 7, 30, 90)

    def test_parse_rejects_garbage(self) -> None:
        """Non-numeric values are a configuration error."""
        with pytest.raises(ValueError, match="Invalid alert threshold list"):
            AlertThresholds.parse("7,seven")

    def test_parse_empty_is_invalid(self) -> None:
        """An empty list has no thresholds."""
        with pytest.raises(InvalidThresholdsError):
            AlertThresholds.parse("")

    def test_thresholds_are_frozen(self) -> None:
        """Thresholds should be immutable."""
        thresholds = AlertThresholds()
        with pytest.raises(AttributeError):
            thresholds.days = (1,)  # type: ignore[misc]

"""Tests for enum value objects."""

from __future__ import annotations

import pytest

from credential_expiry_monitor.domain.value_objects import CredentialType, NotificationLevel, PrincipalKind


class TestCredentialType:
    """Tests for CredentialType enum."""

    def test_display_values(self) -> None:
        """Values are the snapshot and subject spelling."""
        assert str(CredentialType.CERTIFICATE) == "Certificate"
        assert str(CredentialType.SECRET) == "Secret"

    def test_parse_is_case_insensitive(self) -> None:
        """Parsing tolerates case and whitespace."""
        assert CredentialType.parse(" certificate ") is CredentialType.CERTIFICATE
        assert CredentialType.parse("SECRET") is CredentialType.SECRET

    def test_parse_unknown(self) -> None:
        """Unknown types are rejected."""
        with pytest.raises(ValueError, match="Unknown credential type"):
            CredentialType.parse("password")


class TestPrincipalKind:
    """Tests for PrincipalKind enum."""

    @pytest.mark.parametrize(
        ("odata_type", "expected"),
        [
            ("#microsoft.graph.user", PrincipalKind.USER),
            ("#microsoft.graph.group", PrincipalKind.GROUP),
            ("#microsoft.graph.servicePrincipal", PrincipalKind.SERVICE_PRINCIPAL),
            ("#microsoft.graph.device", PrincipalKind.OTHER),
            (None, PrincipalKind.OTHER),
        ],
    )
    def test_from_odata_type(self, odata_type: str | None, expected: PrincipalKind) -> None:
        """Graph types map onto principal kinds."""
        assert PrincipalKind.from_odata_type(odata_type) is expected

    def test_only_users_and_groups_have_mailboxes(self) -> None:
        """Service principals and others never contribute an email."""
        assert PrincipalKind.USER.has_mailbox is True
        assert PrincipalKind.GROUP.has_mailbox is True
        assert PrincipalKind.SERVICE_PRINCIPAL.has_mailbox is False
        assert PrincipalKind.OTHER.has_mailbox is False


class TestNotificationLevel:
    """Tests for NotificationLevel enum."""

    def test_levels_by_days_remaining(self) -> None:
        """Urgency follows the countdown."""
        assert NotificationLevel.for_days_remaining(1) is NotificationLevel.CRITICAL
        assert NotificationLevel.for_days_remaining(7) is NotificationLevel.CRITICAL
        assert NotificationLevel.for_days_remaining(15) is NotificationLevel.WARNING
        assert NotificationLevel.for_days_remaining(30) is NotificationLevel.WARNING
        assert NotificationLevel.for_days_remaining(90) is NotificationLevel.INFO

    def test_color_hex(self) -> None:
        """Each level has a header colour."""
        assert NotificationLevel.CRITICAL.color_hex == "#dc3545"
        assert NotificationLevel.INFO.color_hex == "#17a2b8"

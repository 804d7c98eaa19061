"""Tests for notification rendering and dispatch."""

from __future__ import annotations

import asyncio
from datetime import date, timedelta

from fakes import RecordingTransport, make_record

from credential_expiry_monitor.application.services import (
    NotificationDispatcher,
    NotificationRenderer,
    SenderIdentity,
)
from credential_expiry_monitor.domain.entities import NotificationEvent
from credential_expiry_monitor.domain.value_objects import CredentialType


def _event(run_date: date, days: int = 7, **record_kwargs) -> NotificationEvent:
    record = make_record(expiry=run_date + timedelta(days=days), **record_kwargs)
    return NotificationEvent(record=record, run_date=run_date, days_remaining=days)


class TestNotificationRenderer:
    """Tests for NotificationRenderer."""

    def test_subject_format(self, run_date: date) -> None:
        """Subject carries type, application and countdown."""
        subject = NotificationRenderer().subject(_event(run_date, 7, name="Payroll API"))
        assert subject == "Certificate Expiry Alert: Payroll API - 7 Days Remaining"

    def test_subject_for_secret(self, run_date: date) -> None:
        """Secrets are labelled as such."""
        event = _event(run_date, 30, name="Billing", credential_type=CredentialType.SECRET)
        assert NotificationRenderer().subject(event) == "Secret Expiry Alert: Billing - 30 Days Remaining"

    def test_body_contains_details(self, run_date: date) -> None:
        """Body lists application, type, expiry, countdown and owners."""
        event = _event(run_date, 7, name="Payroll API", owner_names=("Ada Lovelace", "deploy-bot"))
        body = NotificationRenderer().html_body(event)
        assert body.startswith("<!DOCTYPE html>")
        assert "Payroll API" in body
        assert "Certificate" in body
        assert "2024-05-08" in body
        assert "<td>7</td>" in body
        assert "Ada Lovelace, deploy-bot" in body
        assert "#dc3545" in body

    def test_body_escapes_html(self, run_date: date) -> None:
        """Directory supplied names cannot inject markup."""
        body = NotificationRenderer().html_body(_event(run_date, name="<script>alert(1)</script>"))
        assert "<script>" not in body
        assert "&lt;script&gt;" in body

    def test_portal_link_only_with_application_id(self, run_date: date) -> None:
        """The manage link needs the application id."""
        renderer = NotificationRenderer()
        assert "portal.azure.com" not in renderer.html_body(_event(run_date))
        assert "portal.azure.com" in renderer.html_body(_event(run_date, application_id="app-1"))


class TestNotificationDispatcher:
    """Tests for NotificationDispatcher."""

    def test_sends_one_message_per_event(
        self, dispatcher: NotificationDispatcher, transport: RecordingTransport, run_date: date
    ) -> None:
        """Each event becomes one email to its owners."""
        events = [
            _event(run_date, 7, name="Payroll API", owner_emails=("ada@example.com", "ops@example.com")),
            _event(run_date, 30, name="Billing", owner_emails=("grace@example.com",)),
        ]

        result = asyncio.run(dispatcher.dispatch(events))

        assert result.sent == 2
        assert result.success is True
        first = transport.sent[0]
        assert first.to_addresses == ("ada@example.com", "ops@example.com")
        assert first.from_address == "alerts@example.com"
        assert first.from_name == "Expiry Monitor"
        assert "7 Days Remaining" in first.subject

    def test_event_without_recipients_is_skipped(
        self, dispatcher: NotificationDispatcher, transport: RecordingTransport, run_date: date
    ) -> None:
        """No owner email means no email, and no failure."""
        events = [_event(run_date, owner_emails=()), _event(run_date, owner_emails=("  ", ""))]

        result = asyncio.run(dispatcher.dispatch(events))

        assert transport.sent == []
        assert result.skipped == 2
        assert result.failed == 0
        assert result.success is True

    def test_transport_error_does_not_stop_later_events(
        self, dispatcher: NotificationDispatcher, transport: RecordingTransport, run_date: date
    ) -> None:
        """A failing send is counted and the next event is still sent."""
        transport.raise_for.add("Broken")
        events = [_event(run_date, name="Broken"), _event(run_date, name="Healthy")]

        result = asyncio.run(dispatcher.dispatch(events))

        assert result.failed == 1
        assert result.sent == 1
        assert result.success is False
        assert [m.subject for m in transport.sent] == [
            "Certificate Expiry Alert: Healthy - 7 Days Remaining"
        ]

    def test_rejected_message_counted_as_failure(
        self, dispatcher: NotificationDispatcher, transport: RecordingTransport, run_date: date
    ) -> None:
        """A transport returning False is a failure."""
        transport.reject_for.add("Payroll")
        result = asyncio.run(dispatcher.dispatch([_event(run_date, name="Payroll API")]))
        assert result.failed == 1
        assert result.sent == 0

    def test_dry_run_sends_nothing(
        self, transport: RecordingTransport, sender: SenderIdentity, run_date: date
    ) -> None:
        """Dry run renders but never submits."""
        dispatcher = NotificationDispatcher(transport, sender, dry_run=True)

        result = asyncio.run(dispatcher.dispatch([_event(run_date)]))

        assert transport.sent == []
        assert result.suppressed == 1
        assert result.sent == 0

    def test_build_message_trims_recipients(self, dispatcher: NotificationDispatcher, run_date: date) -> None:
        """Recipient addresses are trimmed."""
        message = dispatcher.build_message(_event(run_date, owner_emails=(" ada@example.com ",)))
        assert message is not None
        assert message.to_addresses == ("ada@example.com",)
        assert message.html_body.startswith("<!DOCTYPE html>")

"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import date

import pytest
from fakes import FakeDirectory, InMemoryStorage, RecordingTransport

from credential_expiry_monitor.application.services import (
    NotificationDispatcher,
    ReportStore,
    ReportStoreConfig,
    SenderIdentity,
)
from credential_expiry_monitor.domain.services import ExpiryClassifier
from credential_expiry_monitor.domain.value_objects import AlertThresholds


@pytest.fixture
def run_date() -> date:
    """Fixed run date used across tests."""
    return date(2024, 5, 1)


@pytest.fixture
def default_thresholds() -> AlertThresholds:
    """Default alert threshold set."""
    return AlertThresholds()


@pytest.fixture
def classifier(default_thresholds: AlertThresholds) -> ExpiryClassifier:
    """Classifier with the default thresholds."""
    return ExpiryClassifier(default_thresholds)


@pytest.fixture
def directory() -> FakeDirectory:
    """Empty in-memory directory."""
    return FakeDirectory()


@pytest.fixture
def durable_storage() -> InMemoryStorage:
    """In-memory durable storage."""
    return InMemoryStorage("durable")


@pytest.fixture
def local_storage() -> InMemoryStorage:
    """In-memory local working area."""
    return InMemoryStorage("local")


@pytest.fixture
def report_store(durable_storage: InMemoryStorage, local_storage: InMemoryStorage) -> ReportStore:
    """Report store with default naming and a 10 day retention."""
    return ReportStore(durable_storage, ReportStoreConfig(), local=local_storage)


@pytest.fixture
def transport() -> RecordingTransport:
    """Email transport recording every message."""
    return RecordingTransport()


@pytest.fixture
def sender() -> SenderIdentity:
    """From identity of alerts."""
    return SenderIdentity(address="alerts@example.com", name="Expiry Monitor")


@pytest.fixture
def dispatcher(transport: RecordingTransport, sender: SenderIdentity) -> NotificationDispatcher:
    """Dispatcher sending through the recording transport."""
    return NotificationDispatcher(transport, sender)

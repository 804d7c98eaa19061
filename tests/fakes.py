"""In-memory implementations of the application ports."""

from __future__ import annotations

from datetime import UTC, date, datetime, time

from credential_expiry_monitor.application.exceptions import (
    DirectoryError,
    NotificationError,
    SnapshotStorageError,
)
from credential_expiry_monitor.application.ports import (
    ApplicationRef,
    EmailMessage,
    PrincipalRef,
    RawCredential,
    StoredObject,
)
from credential_expiry_monitor.domain.entities import CredentialRecord
from credential_expiry_monitor.domain.value_objects import CredentialType, PrincipalKind


def make_record(
    name: str = "Payroll API",
    expiry: date = date(2024, 5, 8),
    credential_type: CredentialType = CredentialType.CERTIFICATE,
    owner_names: tuple[str, ...] = ("Ada Lovelace",),
    owner_emails: tuple[str, ...] = ("ada@example.com",),
    application_id: str | None = None,
) -> CredentialRecord:
    """Build a credential record with sensible defaults."""
    return CredentialRecord.create(
        application_name=name,
        expiry_date=expiry,
        credential_type=credential_type,
        owner_names=owner_names,
        owner_emails=owner_emails,
        application_id=application_id,
    )


def utc_midnight(day: date) -> datetime:
    """Timezone-aware midnight of a date."""
    return datetime.combine(day, time(0, 0), tzinfo=UTC)


def user(name: str, email: str | None) -> PrincipalRef:
    return PrincipalRef(object_id=f"user-{name}", kind=PrincipalKind.USER, display_name=name, email=email)


def group(name: str, email: str | None) -> PrincipalRef:
    return PrincipalRef(object_id=f"group-{name}", kind=PrincipalKind.GROUP, display_name=name, email=email)


def service_principal(name: str) -> PrincipalRef:
    return PrincipalRef(object_id=f"sp-{name}", kind=PrincipalKind.SERVICE_PRINCIPAL, display_name=name)


class FakeDirectory:
    """Directory port backed by dictionaries."""

    def __init__(self) -> None:
        self.applications: list[ApplicationRef] = []
        self.credentials: dict[str, list[RawCredential]] = {}
        self.owners: dict[str, list[PrincipalRef]] = {}
        self.failing_credentials: set[str] = set()
        self.failing_owners: set[str] = set()
        self.list_error: DirectoryError | None = None

    def add_application(
        self,
        name: str,
        credentials: list[RawCredential],
        owners: list[PrincipalRef] | None = None,
        app_id: str | None = None,
    ) -> ApplicationRef:
        application = ApplicationRef(object_id=f"obj-{name}", display_name=name, app_id=app_id)
        self.applications.append(application)
        self.credentials[application.object_id] = credentials
        self.owners[application.object_id] = owners or []
        return application

    async def list_applications(self) -> list[ApplicationRef]:
        if self.list_error is not None:
            raise self.list_error
        return list(self.applications)

    async def get_credentials(self, application: ApplicationRef) -> list[RawCredential]:
        if application.display_name in self.failing_credentials:
            raise DirectoryError(f"credentials of {application.display_name} unavailable")
        return self.credentials[application.object_id]

    async def get_owners(self, application: ApplicationRef) -> list[PrincipalRef]:
        if application.display_name in self.failing_owners:
            raise DirectoryError(f"owners of {application.display_name} unavailable")
        return self.owners[application.object_id]


class InMemoryStorage:
    """Snapshot storage port backed by a dictionary."""

    def __init__(self, name: str = "memory") -> None:
        self._name = name
        self.objects: dict[str, tuple[bytes, datetime]] = {}
        self.failing_deletes: set[str] = set()
        self.fail_puts = False
        self.fail_list = False
        self.verify_error: SnapshotStorageError | None = None
        self.now = datetime(2024, 5, 1, 6, 0, tzinfo=UTC)

    @property
    def name(self) -> str:
        return self._name

    def add(self, key: str, last_modified: datetime, data: bytes = b"") -> None:
        self.objects[key] = (data, last_modified)

    async def verify(self) -> None:
        if self.verify_error is not None:
            raise self.verify_error

    async def put(self, key: str, data: bytes) -> None:
        if self.fail_puts:
            raise SnapshotStorageError(f"cannot write {key}")
        self.objects[key] = (data, self.now)

    async def list_objects(self, prefix: str = "") -> list[StoredObject]:
        if self.fail_list:
            raise SnapshotStorageError("cannot list")
        return [
            StoredObject(key=key, last_modified=modified)
            for key, (_, modified) in sorted(self.objects.items())
            if key.startswith(prefix)
        ]

    async def delete(self, key: str) -> None:
        if key in self.failing_deletes:
            raise SnapshotStorageError(f"cannot delete {key}")
        del self.objects[key]


class RecordingTransport:
    """Email transport that records messages instead of sending them."""

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []
        self.raise_for: set[str] = set()
        self.reject_for: set[str] = set()

    def is_configured(self) -> bool:
        return True

    async def send(self, message: EmailMessage) -> bool:
        if any(name in message.subject for name in self.raise_for):
            raise NotificationError(f"relay refused '{message.subject}'")
        if any(name in message.subject for name in self.reject_for):
            return False
        self.sent.append(message)
        return True


class StaticTokenProvider:
    """Token provider returning a fixed bearer token."""

    async def acquire_token(self) -> str:
        return "test-token"

"""Principal kind value object."""

from enum import StrEnum, auto


class PrincipalKind(StrEnum):
    """Kind of directory principal that can own an application."""

    USER = auto()
    GROUP = auto()
    SERVICE_PRINCIPAL = auto()
    OTHER = auto()

    def __str__(self) -> str:
        return self.value

    @property
    def has_mailbox(self) -> bool:
        """Only users and groups carry an email address worth alerting."""
        return self in {PrincipalKind.USER, PrincipalKind.GROUP}

    @classmethod
    def from_odata_type(cls, odata_type: str | None) -> "PrincipalKind":
        """Map a Graph ``@odata.type`` value to a principal kind."""
        match (odata_type or "").removeprefix("#microsoft.graph.").lower():
            case "user":
                return cls.USER
            case "group":
                return cls.GROUP
            case "serviceprincipal":
                return cls.SERVICE_PRINCIPAL
            case _:
                return cls.OTHER

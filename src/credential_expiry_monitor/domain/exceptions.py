"""Domain exceptions."""


class DomainError(Exception):
    """Base exception for domain errors."""


class InvalidCredentialRecordError(DomainError, ValueError):
    """Raised when a credential record is missing required data."""


class InvalidThresholdsError(DomainError, ValueError):
    """Raised when alert thresholds are invalid."""

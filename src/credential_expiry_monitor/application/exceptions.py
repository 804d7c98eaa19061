"""Application layer exceptions."""


class ApplicationError(Exception):
    """Base exception for application errors."""


class DirectoryError(ApplicationError):
    """Raised when reading from the identity directory fails."""


class SnapshotStorageError(ApplicationError):
    """Raised when a snapshot storage operation fails."""


class NotificationError(ApplicationError):
    """Raised when an email transport cannot submit a message."""


class ConfigurationError(ApplicationError, ValueError):
    """Raised when configuration is invalid."""


class PrerequisiteError(ApplicationError):
    """Raised when a run cannot start because a prerequisite is unavailable."""

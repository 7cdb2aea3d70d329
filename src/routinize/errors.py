"""Exception hierarchy shared by services, the web API and the CLI."""


class RoutinizeError(Exception):
    """Base class for application errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(RoutinizeError):
    """A requested record does not exist."""


class ValidationError(RoutinizeError):
    """Input rejected before or by storage (bad ranges, duplicates)."""


class StorageError(RoutinizeError):
    """The storage layer failed and no fallback succeeded."""

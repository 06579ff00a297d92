class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""


class NotFoundError(DomainError):
    """Raised when a referenced project, worker or diary entry does not exist."""

    status_code = 404


class DuplicateEntryError(DomainError):
    """Raised when a worker already has a diary entry for the project and day."""


class InvalidTimeRangeError(DomainError):
    """Raised when an end time is not strictly after the start time."""


class AlreadyClockedOutError(DomainError):
    """Raised when clocking out an entry that already has an end time."""


class AlreadyFinalizedError(DomainError):
    """Raised when finalizing a project that is already finalized."""


class ProjectFinalizedError(DomainError):
    """Raised when mutating the diary of a finalized project."""


class StoreUnavailableError(DomainError):
    """Raised when the database cannot serve a request."""

    status_code = 500

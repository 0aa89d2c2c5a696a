class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicateAttendanceError(ValidationError):
    """Raised when a (student, date) pair is already marked in the loaded record set."""


class AuthenticationError(DomainError):
    """Raised when the login exchange fails or the session token is missing/expired."""


class RecordStoreError(DomainError):
    """Raised when the remote Record Store rejects a call or cannot be reached."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ReportGenerationError(DomainError):
    """Raised when the narrative report generator fails."""

"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class ConflictError(ApplicationError):
    """Raised when there is a state conflict."""

    def __init__(self, message: str = "Resource conflict") -> None:
        super().__init__(message, code="RES_CONFLICT")


class InvalidTransitionError(ApplicationError):
    """Raised when an editor action is not allowed in the current state."""

    def __init__(self, message: str = "Invalid editor transition") -> None:
        super().__init__(message, code="STATE_INVALID_TRANSITION")


class DatabaseError(ApplicationError):
    """Raised when a database operation fails."""

    def __init__(self, message: str = "Database error", code: str = "SYS_DATABASE_ERROR") -> None:
        super().__init__(message, code=code)


class StorageUnavailableError(DatabaseError):
    """Raised when the note database cannot be opened or initialised."""

    def __init__(self, message: str = "Note storage unavailable") -> None:
        super().__init__(message, code="SYS_STORAGE_UNAVAILABLE")


class SaveFailedError(DatabaseError):
    """Raised when pending note changes cannot be committed."""

    def __init__(self, message: str = "Saving note failed") -> None:
        super().__init__(message, code="SYS_SAVE_FAILED")

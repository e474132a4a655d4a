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
    """Raised when a note id is not in the collection."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class DecodeError(ApplicationError):
    """Raised when persisted data cannot be read as a note collection."""

    def __init__(self, message: str = "Persisted data is malformed") -> None:
        super().__init__(message, code="DATA_DECODE_ERROR")


class WriteError(ApplicationError):
    """Raised when the durable medium rejects a write."""

    def __init__(self, message: str = "Storage write failed", key: str | None = None) -> None:
        self.key = key
        super().__init__(message, code="STORAGE_WRITE_ERROR")

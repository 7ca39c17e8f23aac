"""
Custom exceptions for Filedrop.

Every failure belongs to one of three kinds (bad request, not found,
internal error). Each exception carries the HTTP status code it resolves to,
so the handler boundary only has to read ``status_code``.
"""

from typing import Any


class FiledropError(Exception):
    """Base exception for all Filedrop errors."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
        error_code: str | None = None,
    ) -> None:
        self.message = message or self.message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for structured logging."""
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# Error Kinds
# =============================================================================


class BadRequestError(FiledropError):
    """Raised when the request itself cannot be served."""

    status_code = 400
    error_code = "BAD_REQUEST"
    message = "Bad request"


class NotFoundError(FiledropError):
    """Raised when a resource is not found."""

    status_code = 404
    error_code = "NOT_FOUND"
    message = "Resource not found"


class InternalError(FiledropError):
    """Raised when the server fails after accepting the request."""

    status_code = 500
    error_code = "INTERNAL_ERROR"
    message = "An internal error occurred"


# =============================================================================
# Request Errors
# =============================================================================


class MissingFilenameError(BadRequestError):
    """Raised when the ``filename`` query parameter is absent."""

    error_code = "MISSING_FILENAME"
    message = "Query parameter 'filename' is required"


class EmptyFormError(BadRequestError):
    """Raised when a multipart form carries no field."""

    error_code = "EMPTY_FORM"
    message = "Multipart form contains no field"


class MalformedFieldError(BadRequestError):
    """Raised when the first multipart field cannot be used as a file."""

    error_code = "MALFORMED_FIELD"
    message = "Multipart field has no filename"

    def __init__(self, field_name: str | None, reason: str | None = None) -> None:
        super().__init__(
            message=reason or self.message,
            details={"field_name": field_name},
        )


class InvalidFilenameError(BadRequestError):
    """Raised when strict filename checking rejects a storage key."""

    error_code = "INVALID_FILENAME"
    message = "Filename is not allowed"

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(
            message=f"Filename '{filename}' is not allowed: {reason}",
            details={"filename": filename, "reason": reason},
        )


class ContentDispositionError(InternalError):
    """Raised when a filename cannot be placed in a response header."""

    error_code = "INVALID_HEADER_VALUE"
    message = "Filename cannot be used in Content-Disposition"

    def __init__(self, filename: str) -> None:
        super().__init__(details={"filename": filename})


# =============================================================================
# Storage Errors
# =============================================================================


class StorageError(FiledropError):
    """Raised when storage operation fails."""

    status_code = 500
    error_code = "STORAGE_ERROR"
    message = "Storage operation failed"


class FileCreateError(StorageError, BadRequestError):
    """Raised when the destination file cannot be created."""

    status_code = 400
    error_code = "FILE_CREATE_ERROR"
    message = "Failed to create file"


class FileWriteError(StorageError, InternalError):
    """Raised when writing or flushing a created file fails."""

    status_code = 500
    error_code = "FILE_WRITE_ERROR"
    message = "Failed to write file"


class FileReadError(StorageError, NotFoundError):
    """Raised when a stored file cannot be read."""

    status_code = 404
    error_code = "FILE_READ_ERROR"
    message = "Failed to read file"


class StoredFileNotFoundError(FileReadError):
    """Raised when file is not found in storage."""

    error_code = "FILE_NOT_FOUND"
    message = "File not found in storage"


class StorageListError(StorageError):
    """Raised when the storage root cannot be enumerated."""

    error_code = "STORAGE_LIST_ERROR"
    message = "Failed to list files"

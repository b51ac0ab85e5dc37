"""
Custom Exceptions - Application-specific error classes.

Every failure that can happen before a provider is called has its own type,
carrying an HTTP status code, a machine-readable error code and the name of
the pipeline stage that failed. The API layer turns them into JSON bodies.

Provider failures are not in this hierarchy: the gateway converts them into
ModelResponse.error and never raises them.
"""
from typing import Optional


class FileContextException(Exception):
    """
    Base exception for all file-context errors.

    Subclass this for specific error types.
    """
    status_code: int = 500
    error_code: str = "internal_error"
    stage: str = "internal"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Convert to error response dict."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
            "stage": self.stage,
        }


class ValidationError(FileContextException):
    """Raised when a query request is malformed."""
    status_code = 400
    error_code = "validation_error"
    stage = "validation"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details=f"field={field}" if field else None)
        self.field = field


class InvalidPathError(FileContextException):
    """Raised when a path cannot be sanitized."""
    status_code = 400
    error_code = "invalid_path"
    stage = "sanitize"

    def __init__(self, message: str = "Path must be a non-empty string"):
        super().__init__(message)


class NotFoundError(FileContextException):
    """Raised when the requested path does not exist."""
    status_code = 404
    error_code = "not_found"
    stage = "aggregate"

    def __init__(self, path: str):
        super().__init__(
            message=f"Path not found: {path}",
            details=f"path={path}"
        )
        self.path = path


class FilePermissionError(FileContextException):
    """Raised when the requested path exists but cannot be read."""
    status_code = 403
    error_code = "permission_denied"
    stage = "aggregate"

    def __init__(self, path: str):
        super().__init__(
            message=f"Permission denied: {path}",
            details=f"path={path}"
        )
        self.path = path


class ReadError(FileContextException):
    """Raised for any other I/O failure while reading the filesystem."""
    status_code = 500
    error_code = "read_error"
    stage = "aggregate"

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Failed to read {path}: {reason}",
            details=f"path={path}"
        )
        self.path = path
        self.reason = reason


class UploadError(FileContextException):
    """Raised when an uploaded file is rejected."""
    status_code = 400
    error_code = "upload_error"
    stage = "upload"


class FileTooLargeError(UploadError):
    """Raised when an upload exceeds the configured size limit."""
    status_code = 413
    error_code = "file_too_large"

    def __init__(self, limit: str):
        super().__init__(
            message=f"File exceeds the {limit} upload limit",
            details=f"limit={limit}"
        )

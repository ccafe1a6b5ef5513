"""
Error Handling Module

Defines domain exceptions and error categories for the file hosting core.
Domain exceptions are pure and carry structured context describing
exactly which rule failed. Application exceptions bridge those categories
to user-facing messages.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ErrorCategory(Enum):
    """Error category enumeration for structured error handling."""

    FILE_TOO_LARGE = "file_too_large"
    INVALID_FILE_TYPE = "invalid_file_type"
    INVALID_FILE_NAME = "invalid_file_name"
    INVALID_FILE_LOCATION = "invalid_file_location"
    FILE_ALREADY_UPLOADED = "file_already_uploaded"
    FILE_ALREADY_DELETED = "file_already_deleted"
    FILE_NOT_FOUND = "file_not_found"
    FILE_ACCESS_DENIED = "file_access_denied"
    FILE_NOT_DOWNLOADABLE = "file_not_downloadable"
    STORAGE_ERROR = "storage_error"
    SYSTEM_ERROR = "system_error"


# User-friendly error messages with actionable guidance
ERROR_MESSAGES: Dict[ErrorCategory, Dict[str, str]] = {
    ErrorCategory.FILE_TOO_LARGE: {
        "title": "Invalid File Size",
        "message": "The file is empty or exceeds the maximum allowed size of 10 MB.",
        "action": "Upload a non-empty file no larger than 10 MB.",
    },
    ErrorCategory.INVALID_FILE_TYPE: {
        "title": "File Type Not Allowed",
        "message": "Only JPEG images, PNG images and PDF documents can be uploaded.",
        "action": "Convert the file to JPEG, PNG or PDF and try again.",
    },
    ErrorCategory.INVALID_FILE_NAME: {
        "title": "Invalid File Name",
        "message": "The file name is empty, too long, or contains forbidden characters.",
        "action": "Rename the file using at most 255 characters and no slashes.",
    },
    ErrorCategory.INVALID_FILE_LOCATION: {
        "title": "Invalid Storage Location",
        "message": "The storage location for this file is not valid.",
        "action": "Please try again. If the problem persists, contact support.",
    },
    ErrorCategory.FILE_ALREADY_UPLOADED: {
        "title": "File Already Uploaded",
        "message": "This file has already been uploaded.",
        "action": "No further action is needed.",
    },
    ErrorCategory.FILE_ALREADY_DELETED: {
        "title": "File Deleted",
        "message": "This file has been deleted and can no longer be changed.",
        "action": "Upload the file again to create a new copy.",
    },
    ErrorCategory.FILE_NOT_FOUND: {
        "title": "File Not Found",
        "message": "The requested file could not be found.",
        "action": "Check the file identifier and try again.",
    },
    ErrorCategory.FILE_ACCESS_DENIED: {
        "title": "Access Denied",
        "message": "You do not have permission to access this file.",
        "action": "Ask the owner of the file to share it with you.",
    },
    ErrorCategory.FILE_NOT_DOWNLOADABLE: {
        "title": "File Not Available",
        "message": "This file is not available for download yet.",
        "action": "Wait for the upload to finish and try again.",
    },
    ErrorCategory.STORAGE_ERROR: {
        "title": "Storage Error",
        "message": "File information could not be read or saved.",
        "action": "Please try again later.",
    },
    ErrorCategory.SYSTEM_ERROR: {
        "title": "System Error",
        "message": "An unexpected error occurred while processing your request.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
}


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================

class DomainError(Exception):
    """
    Base exception for all domain errors.

    Each subclass belongs to exactly one ErrorCategory and exposes the
    structured values that describe the failure through ``context``.
    """

    category: ErrorCategory = ErrorCategory.SYSTEM_ERROR

    def __init__(self, message: str, original_error: Exception = None):
        """
        Initialize domain error.

        Args:
            message: Error message
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    @property
    def context(self) -> Dict[str, Any]:
        """Structured values attached to this failure."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging or API responses."""
        data = {"error": self.category.value, "message": self.message}
        data.update(self.context)
        return data


class FileSizeExceededError(DomainError):
    """
    Raised when a file size is outside the accepted range.

    Covers both empty/negative sizes and sizes above the maximum.
    """

    category = ErrorCategory.FILE_TOO_LARGE

    def __init__(self, file_size: int, max_size: int):
        self.file_size = file_size
        self.max_size = max_size
        super().__init__(
            f"File size {file_size} bytes exceeds maximum allowed size of "
            f"{max_size} bytes ({max_size / 1024 / 1024:.2f}MB)"
        )

    @property
    def context(self) -> Dict[str, Any]:
        return {"file_size": self.file_size, "max_size": self.max_size}


class InvalidFileTypeError(DomainError):
    """Raised when a MIME type is not in the allow-list."""

    category = ErrorCategory.INVALID_FILE_TYPE

    def __init__(self, mime_type: str, allowed_types: List[str]):
        self.mime_type = mime_type
        self.allowed_types = list(allowed_types)
        super().__init__(
            f"File type '{mime_type}' is not allowed. "
            f"Allowed types: {', '.join(self.allowed_types)}"
        )

    @property
    def context(self) -> Dict[str, Any]:
        return {"mime_type": self.mime_type, "allowed_types": list(self.allowed_types)}


class InvalidFileNameError(DomainError):
    """Raised when a file name is empty, too long or contains forbidden characters."""

    category = ErrorCategory.INVALID_FILE_NAME

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)

    @property
    def context(self) -> Dict[str, Any]:
        return {"reason": self.reason}


class InvalidFileLocationError(DomainError):
    """
    Raised when a storage location is invalid.

    Cases:
    - Empty container or path
    - Path containing ".." (traversal attempt)
    - Path starting with "/"
    """

    category = ErrorCategory.INVALID_FILE_LOCATION

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)

    @property
    def context(self) -> Dict[str, Any]:
        return {"reason": self.reason}


class FileAlreadyUploadedError(DomainError):
    """Raised when marking an already uploaded file as uploaded."""

    category = ErrorCategory.FILE_ALREADY_UPLOADED

    def __init__(self, file_id: str):
        self.file_id = file_id
        super().__init__(f"File with id '{file_id}' is already uploaded")

    @property
    def context(self) -> Dict[str, Any]:
        return {"file_id": self.file_id}


class FileAlreadyDeletedError(DomainError):
    """Raised when operating on a file that is already deleted."""

    category = ErrorCategory.FILE_ALREADY_DELETED

    def __init__(self, file_id: str):
        self.file_id = file_id
        super().__init__(f"File with id '{file_id}' is already deleted")

    @property
    def context(self) -> Dict[str, Any]:
        return {"file_id": self.file_id}


class FileNotFoundError(DomainError):
    """
    Raised when a file lookup by id misses.

    Repository finders return None on a clean miss; this error is raised
    by the services that require the file to exist.
    """

    category = ErrorCategory.FILE_NOT_FOUND

    def __init__(self, file_id: str):
        self.file_id = file_id
        super().__init__(f"File with id '{file_id}' not found")

    @property
    def context(self) -> Dict[str, Any]:
        return {"file_id": self.file_id}


class FileAccessDeniedError(DomainError):
    """Raised when a requester does not own the file."""

    category = ErrorCategory.FILE_ACCESS_DENIED

    def __init__(self, file_id: str, requester_id: str):
        self.file_id = file_id
        self.requester_id = requester_id
        super().__init__(
            f"Owner '{requester_id}' is not allowed to access file '{file_id}'"
        )

    @property
    def context(self) -> Dict[str, Any]:
        return {"file_id": self.file_id, "requester_id": self.requester_id}


class FileNotDownloadableError(DomainError):
    """Raised when a download is requested for a file that is not uploaded."""

    category = ErrorCategory.FILE_NOT_DOWNLOADABLE

    def __init__(self, file_id: str, status: str):
        self.file_id = file_id
        self.status = status
        super().__init__(f"File with id '{file_id}' cannot be downloaded in {status} state")

    @property
    def context(self) -> Dict[str, Any]:
        return {"file_id": self.file_id, "status": self.status}


# ============================================================================
# Persistence Exceptions
# ============================================================================

class RepositoryError(Exception):
    """
    Raised by repository implementations when the storage system fails.

    Deliberately outside the DomainError hierarchy so callers can tell a
    storage outage apart from a broken business rule.
    """

    category = ErrorCategory.STORAGE_ERROR

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.original_error = original_error


# ============================================================================
# Application Layer Exceptions
# ============================================================================

class ApplicationError(Exception):
    """
    Base application error with category and user-friendly messaging.

    Bridges domain errors with user-facing error messages and status codes.
    """

    def __init__(
        self,
        category: ErrorCategory,
        technical_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize application error.

        Args:
            category: Error category
            technical_message: Technical error details for logging
            context: Additional context information
        """
        self.category = category
        self.technical_message = technical_message or ""
        self.context = context or {}

        error_info = ERROR_MESSAGES.get(
            category, ERROR_MESSAGES[ErrorCategory.SYSTEM_ERROR]
        )
        self.title = error_info["title"]
        self.message = error_info["message"]
        self.action = error_info["action"]

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for API response.

        Returns:
            Dictionary with error information
        """
        return {
            "error": self.category.value,
            "title": self.title,
            "message": self.message,
            "action": self.action,
        }


def error_category(error: Exception) -> ErrorCategory:
    """Category of a raised error; anything unexpected is a system error."""
    if isinstance(error, (DomainError, RepositoryError)):
        return error.category
    return ErrorCategory.SYSTEM_ERROR


# HTTP status codes used by the surrounding service layer
STATUS_CODES: Dict[ErrorCategory, int] = {
    ErrorCategory.FILE_TOO_LARGE: 413,
    ErrorCategory.INVALID_FILE_TYPE: 415,
    ErrorCategory.INVALID_FILE_NAME: 400,
    ErrorCategory.INVALID_FILE_LOCATION: 400,
    ErrorCategory.FILE_ALREADY_UPLOADED: 409,
    ErrorCategory.FILE_ALREADY_DELETED: 410,
    ErrorCategory.FILE_NOT_FOUND: 404,
    ErrorCategory.FILE_ACCESS_DENIED: 403,
    ErrorCategory.FILE_NOT_DOWNLOADABLE: 409,
    ErrorCategory.STORAGE_ERROR: 503,
    ErrorCategory.SYSTEM_ERROR: 500,
}


def create_error_response(
    category: ErrorCategory,
    technical_message: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None,
    status_code: Optional[int] = None,
) -> Tuple[Dict[str, Any], int]:
    """
    Create a structured error response for the service layer.

    Args:
        category: Error category
        technical_message: Technical error details for logging
        context: Additional context information
        status_code: HTTP status code, derived from the category when omitted

    Returns:
        Tuple of (error_dict, status_code)
    """
    error = ApplicationError(category, technical_message, context)
    if status_code is None:
        status_code = STATUS_CODES.get(category, 500)
    return error.to_dict(), status_code

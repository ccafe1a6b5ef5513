"""
File Storage Value Objects

Immutable, self-validating value objects describing an uploaded file.
An instance that breaks a business rule can never be constructed.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Tuple

from ..errors import (
    FileSizeExceededError,
    InvalidFileLocationError,
    InvalidFileNameError,
    InvalidFileTypeError,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FileStatus(Enum):
    """
    File lifecycle status.

    PENDING:  registered, bytes not yet confirmed in storage
    UPLOADED: bytes confirmed present in storage
    DELETED:  soft-deleted; terminal
    """
    PENDING = "PENDING"
    UPLOADED = "UPLOADED"
    DELETED = "DELETED"

    def is_terminal(self) -> bool:
        """Check if no transition leaves this status."""
        return self is FileStatus.DELETED


@dataclass(frozen=True)
class FileMetadata:
    """
    Value object holding the validated metadata of a file.

    Rules are checked in order: size, then MIME type, then name.
    The limits are global constants, not per-owner policy. A naive
    ``uploaded_at`` is taken to be UTC.
    """

    MAX_FILE_SIZE: ClassVar[int] = 10 * 1024 * 1024
    MAX_FILE_NAME_LENGTH: ClassVar[int] = 255
    ALLOWED_MIME_TYPES: ClassVar[Tuple[str, ...]] = (
        "image/jpeg",
        "image/png",
        "application/pdf",
    )
    PDF_MIME_TYPE: ClassVar[str] = "application/pdf"

    file_name: str
    file_size: int
    mime_type: str
    owner_id: str
    uploaded_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        self._validate_file_size()
        self._validate_mime_type()
        self._validate_file_name()

        if self.uploaded_at.tzinfo is None:
            object.__setattr__(self, "uploaded_at", self.uploaded_at.replace(tzinfo=timezone.utc))

    def _validate_file_size(self) -> None:
        # bool is an int subclass but never a byte count
        if (
            not isinstance(self.file_size, int)
            or isinstance(self.file_size, bool)
            or self.file_size <= 0
            or self.file_size > self.MAX_FILE_SIZE
        ):
            raise FileSizeExceededError(self.file_size, self.MAX_FILE_SIZE)

    def _validate_mime_type(self) -> None:
        if self.mime_type not in self.ALLOWED_MIME_TYPES:
            raise InvalidFileTypeError(self.mime_type, list(self.ALLOWED_MIME_TYPES))

    def _validate_file_name(self) -> None:
        if not self.file_name or not self.file_name.strip():
            raise InvalidFileNameError("File name cannot be empty")

        if len(self.file_name) > self.MAX_FILE_NAME_LENGTH:
            raise InvalidFileNameError(
                f"File name is too long (max {self.MAX_FILE_NAME_LENGTH} characters)"
            )

        if ".." in self.file_name or "/" in self.file_name or "\0" in self.file_name:
            raise InvalidFileNameError(
                "File name contains invalid characters (.., /, or null byte)"
            )

    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")

    def is_pdf(self) -> bool:
        return self.mime_type == self.PDF_MIME_TYPE

    def get_size_in_mb(self) -> float:
        """Size in MiB, unrounded."""
        return self.file_size / (1024 * 1024)

    def get_file_extension(self) -> str:
        """
        Lower-cased text after the last dot, or "" when there is none.

        Example: "Photo.JPG" -> "jpg"
        """
        parts = self.file_name.split(".")
        return parts[-1].lower() if len(parts) > 1 else ""

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "fileName": self.file_name,
            "fileSize": self.file_size,
            "mimeType": self.mime_type,
            "ownerId": self.owner_id,
            "uploadedAt": self.uploaded_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FileMetadata":
        """Create FileMetadata from dictionary, re-running validation."""
        return cls(
            file_name=data["fileName"],
            file_size=data["fileSize"],
            mime_type=data["mimeType"],
            owner_id=data["ownerId"],
            uploaded_at=datetime.fromisoformat(data["uploadedAt"]),
        )


@dataclass(frozen=True)
class FileLocation:
    """
    Value object representing where a file lives in storage.

    Backend-agnostic: ``container`` is a bucket or namespace and ``path``
    is the object key inside it. Only traversal and rooting are checked.
    """

    SEPARATOR: ClassVar[str] = "/"

    container: str
    path: str

    def __post_init__(self):
        if not self.container or not self.container.strip():
            raise InvalidFileLocationError("Container cannot be empty")

        if not self.path or not self.path.strip():
            raise InvalidFileLocationError("Path cannot be empty")

        if ".." in self.path:
            raise InvalidFileLocationError(
                'Path cannot contain ".." (path traversal attempt)'
            )

        if self.path.startswith(self.SEPARATOR):
            raise InvalidFileLocationError('Path cannot start with "/"')

    def get_full_path(self) -> str:
        """
        Get container and path joined by a single separator.

        Example: "my-bucket/uploads/user-123/photo.jpg"
        """
        return f"{self.container}{self.SEPARATOR}{self.path}"

    def to_dict(self) -> dict:
        return {"container": self.container, "path": self.path}

    @classmethod
    def from_dict(cls, data: dict) -> "FileLocation":
        return cls(container=data["container"], path=data["path"])

    def __str__(self) -> str:
        return self.get_full_path()

"""
File Storage Entities

The File entity: identity, owned value objects and the status lifecycle.

    create() -> PENDING -> mark_as_uploaded() -> UPLOADED -> mark_as_deleted() -> DELETED
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Union

from ..errors import FileAlreadyDeletedError, FileAlreadyUploadedError
from ..events import FileDeletedEvent, FileRegisteredEvent, FileUploadedEvent
from .value_objects import FileLocation, FileMetadata, FileStatus

_FACTORY_TOKEN = object()


class File:
    """
    Entity representing an uploaded file record.

    Instances are obtained only through ``create`` (new upload intent)
    or ``reconstitute`` (rebuilt from persisted state). Status changes
    only through the transition methods; metadata and location never
    change after construction. Equality is by id.
    """

    __slots__ = ("_id", "_metadata", "_location", "_status")

    def __init__(
        self,
        file_id: str,
        metadata: FileMetadata,
        location: FileLocation,
        status: FileStatus,
        _token: object = None,
    ):
        if _token is not _FACTORY_TOKEN:
            raise TypeError("Use File.create() or File.reconstitute() to obtain a File")

        self._id = file_id
        self._metadata = metadata
        self._location = location
        self._status = status

    @classmethod
    def create(cls, metadata: FileMetadata, location: FileLocation) -> "File":
        """
        Factory method to register a new upload intent.

        Args:
            metadata: Validated file metadata
            location: Validated storage location

        Returns:
            New File with a fresh UUID and PENDING status
        """
        return cls(str(uuid.uuid4()), metadata, location, FileStatus.PENDING, _token=_FACTORY_TOKEN)

    @classmethod
    def reconstitute(
        cls,
        file_id: str,
        metadata: FileMetadata,
        location: FileLocation,
        status: Union[FileStatus, str],
    ) -> "File":
        """
        Rebuild an existing file from persisted state.

        The id and status are trusted as given; no transition rules apply.
        """
        return cls(file_id, metadata, location, FileStatus(status), _token=_FACTORY_TOKEN)

    @property
    def id(self) -> str:
        return self._id

    @property
    def metadata(self) -> FileMetadata:
        return self._metadata

    @property
    def location(self) -> FileLocation:
        return self._location

    @property
    def status(self) -> FileStatus:
        return self._status

    def registered_event(self) -> FileRegisteredEvent:
        """Build the event announcing this file's registration."""
        return FileRegisteredEvent(
            aggregate_id=self._id,
            occurred_at=self._metadata.uploaded_at,
            owner_id=self._metadata.owner_id,
            file_name=self._metadata.file_name,
            full_path=self._location.get_full_path(),
        )

    def mark_as_uploaded(self) -> FileUploadedEvent:
        """
        Transition PENDING -> UPLOADED.

        Returns:
            FileUploadedEvent for the transition

        Raises:
            FileAlreadyUploadedError: If the file is already UPLOADED
            FileAlreadyDeletedError: If the file is DELETED
        """
        if self._status is FileStatus.UPLOADED:
            raise FileAlreadyUploadedError(self._id)

        if self._status is FileStatus.DELETED:
            raise FileAlreadyDeletedError(self._id)

        self._status = FileStatus.UPLOADED
        return FileUploadedEvent(
            aggregate_id=self._id,
            occurred_at=datetime.now(timezone.utc),
            owner_id=self._metadata.owner_id,
            file_size=self._metadata.file_size,
        )

    def mark_as_deleted(self) -> FileDeletedEvent:
        """
        Soft delete: PENDING or UPLOADED -> DELETED.

        Stored bytes and the persisted record are left alone; removing
        them is the job of the storage and persistence collaborators.

        Raises:
            FileAlreadyDeletedError: If the file is already DELETED
        """
        if self._status is FileStatus.DELETED:
            raise FileAlreadyDeletedError(self._id)

        previous_status = self._status
        self._status = FileStatus.DELETED
        return FileDeletedEvent(
            aggregate_id=self._id,
            occurred_at=datetime.now(timezone.utc),
            owner_id=self._metadata.owner_id,
            previous_status=previous_status.value,
        )

    def can_be_downloaded(self) -> bool:
        return self._status is FileStatus.UPLOADED

    def belongs_to(self, owner_id: str) -> bool:
        return self._metadata.owner_id == owner_id

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, File):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"File(id={self._id!r}, status={self._status.value}, location={self._location})"

    def to_dict(self) -> Dict[str, Any]:
        """Flat record handed to the persistence layer."""
        return {
            "id": self._id,
            "fileName": self._metadata.file_name,
            "fileSize": self._metadata.file_size,
            "mimeType": self._metadata.mime_type,
            "ownerId": self._metadata.owner_id,
            "container": self._location.container,
            "path": self._location.path,
            "status": self._status.value,
            "uploadedAt": self._metadata.uploaded_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "File":
        """Rebuild a File from the flat record produced by ``to_dict``."""
        return cls.reconstitute(
            data["id"],
            FileMetadata.from_dict(data),
            FileLocation.from_dict(data),
            FileStatus(data["status"]),
        )

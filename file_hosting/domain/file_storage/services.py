"""
File Storage Services

Domain service coordinating the file lifecycle with the repository.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from ..errors import (
    FileAccessDeniedError,
    FileNotDownloadableError,
    FileNotFoundError,
)
from ..events import DomainEvent, FilePurgedEvent
from .entities import File
from .repositories import FileRepository
from .value_objects import FileLocation, FileMetadata, FileStatus


class FileManager:
    """
    Domain service for managing uploaded file records.

    Loads entities, applies lifecycle transitions and persists the result.
    Each state-changing method returns the affected file together with
    the domain event describing the change.
    """

    UPLOAD_PREFIX = "uploads"

    def __init__(self, file_repository: FileRepository):
        """
        Initialize FileManager with repository.

        Args:
            file_repository: Repository for file persistence
        """
        self.file_repo = file_repository

    def build_location(
        self, container: str, owner_id: str, file_name: str, object_key: Optional[str] = None
    ) -> FileLocation:
        """
        Build the storage location for a file.

        Layout: ``<container>/uploads/<owner_id>/<object_key>/<file_name>``.
        A random object key is generated when none is given so two uploads
        with the same name never collide.
        """
        object_key = object_key or uuid.uuid4().hex
        return FileLocation(
            container=container,
            path=f"{self.UPLOAD_PREFIX}/{owner_id}/{object_key}/{file_name}",
        )

    def register_file(
        self,
        file_name: str,
        file_size: int,
        mime_type: str,
        owner_id: str,
        container: str,
    ) -> Tuple[File, DomainEvent]:
        """
        Register a new upload intent.

        Metadata is validated before the location is built and before
        anything is stored.

        Returns:
            Tuple of (PENDING file, FileRegisteredEvent)

        Raises:
            DomainError: If metadata or location are invalid
            RepositoryError: If the file cannot be saved
        """
        metadata = FileMetadata(
            file_name=file_name,
            file_size=file_size,
            mime_type=mime_type,
            owner_id=owner_id,
        )
        file = File.create(metadata, self.build_location(container, owner_id, file_name))
        self.file_repo.save(file)
        return file, file.registered_event()

    def get_file(self, file_id: str) -> File:
        """
        Retrieve a file by id.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        file = self.file_repo.find_by_id(file_id)
        if file is None:
            raise FileNotFoundError(file_id)
        return file

    def get_owned_file(self, file_id: str, owner_id: str) -> File:
        """
        Retrieve a file and check that ``owner_id`` owns it.

        Raises:
            FileNotFoundError: If the file doesn't exist
            FileAccessDeniedError: If the file belongs to someone else
        """
        file = self.get_file(file_id)
        if not file.belongs_to(owner_id):
            raise FileAccessDeniedError(file_id, owner_id)
        return file

    def confirm_upload(
        self, file_id: str, owner_id: Optional[str] = None
    ) -> Tuple[File, DomainEvent]:
        """
        Mark a pending file as uploaded and persist it.

        Raises:
            FileNotFoundError: If the file doesn't exist
            FileAlreadyUploadedError: If it is already uploaded
            FileAlreadyDeletedError: If it was deleted
        """
        file = self._load(file_id, owner_id)
        event = file.mark_as_uploaded()
        self.file_repo.save(file)
        return file, event

    def soft_delete(
        self, file_id: str, owner_id: Optional[str] = None
    ) -> Tuple[File, DomainEvent]:
        """
        Mark a file as deleted and persist it. The record is kept.

        Raises:
            FileNotFoundError: If the file doesn't exist
            FileAlreadyDeletedError: If it was already deleted
        """
        file = self._load(file_id, owner_id)
        event = file.mark_as_deleted()
        self.file_repo.save(file)
        return file, event

    def purge(self, file_id: str, owner_id: Optional[str] = None) -> Optional[DomainEvent]:
        """
        Remove a file record from persistence (hard delete).

        Idempotent: purging an unknown id returns None. When ``owner_id``
        is given, ownership of an existing file is checked first.
        """
        file = self.file_repo.find_by_id(file_id)
        if file is None:
            return None

        if owner_id is not None and not file.belongs_to(owner_id):
            raise FileAccessDeniedError(file_id, owner_id)

        self.file_repo.delete(file_id)
        return FilePurgedEvent(aggregate_id=file_id, occurred_at=datetime.now(timezone.utc))

    def list_files(self, owner_id: str, include_deleted: bool = False) -> List[File]:
        """
        List an owner's files, newest first.

        Args:
            owner_id: Owner identifier
            include_deleted: Whether soft-deleted files are included
        """
        files = self.file_repo.find_by_owner_id(owner_id)
        if include_deleted:
            return files
        return [f for f in files if f.status is not FileStatus.DELETED]

    def get_downloadable_file(self, file_id: str, owner_id: str) -> File:
        """
        Retrieve a file that the owner may download right now.

        Raises:
            FileNotFoundError: If the file doesn't exist
            FileAccessDeniedError: If the file belongs to someone else
            FileNotDownloadableError: If the file is not UPLOADED
        """
        file = self.get_owned_file(file_id, owner_id)
        if not file.can_be_downloaded():
            raise FileNotDownloadableError(file_id, file.status.value)
        return file

    def _load(self, file_id: str, owner_id: Optional[str]) -> File:
        if owner_id is None:
            return self.get_file(file_id)
        return self.get_owned_file(file_id, owner_id)

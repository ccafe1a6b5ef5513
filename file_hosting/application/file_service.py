"""
File Application Service

Coordinates file lifecycle use cases for the surrounding service layer.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from file_hosting.domain.errors import (
    DomainError,
    FileNotFoundError,
    RepositoryError,
    create_error_response,
    error_category,
)
from file_hosting.domain.events import DomainEvent
from file_hosting.domain.file_storage import File, FileManager, FileRepository

from .event_publisher import EventPublisher

logger = logging.getLogger(__name__)


class FileService:
    """
    Application service for file operations.

    Wraps the FileManager domain service, logs each use case, publishes
    the resulting domain events and returns plain dictionaries.
    """

    def __init__(self, file_manager: FileManager, event_publisher: Optional[EventPublisher] = None):
        """
        Initialize FileService.

        Args:
            file_manager: FileManager domain service
            event_publisher: Publisher for domain events (optional)
        """
        self.file_manager = file_manager
        self.event_publisher = event_publisher

    def _publish(self, event: Optional[DomainEvent]) -> None:
        if event is not None and self.event_publisher is not None:
            self.event_publisher.publish(event)

    @staticmethod
    def _file_info(file: File) -> Dict[str, Any]:
        info = file.to_dict()
        info.update({
            "fullPath": file.location.get_full_path(),
            "sizeMb": round(file.metadata.get_size_in_mb(), 2),
            "extension": file.metadata.get_file_extension(),
            "canBeDownloaded": file.can_be_downloaded(),
        })
        return info

    def register_upload(
        self,
        file_name: str,
        file_size: int,
        mime_type: str,
        owner_id: str,
        container: str,
    ) -> Dict[str, Any]:
        """
        Register a new upload intent.

        Returns:
            Dictionary with the PENDING file information

        Raises:
            DomainError: If metadata or location are invalid
            RepositoryError: If the record cannot be saved
        """
        logger.info(f"Registering upload of {file_name} ({file_size} bytes) for owner {owner_id}")
        try:
            file, event = self.file_manager.register_file(
                file_name, file_size, mime_type, owner_id, container
            )
        except DomainError as e:
            logger.warning(f"Rejected upload of {file_name!r} for owner {owner_id}: {e}")
            raise
        except RepositoryError as e:
            logger.error(f"Error saving upload of {file_name!r} for owner {owner_id}: {e}")
            raise

        self._publish(event)
        return self._file_info(file)

    def confirm_upload(self, file_id: str, owner_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Confirm that a file's bytes reached storage.

        Raises:
            FileNotFoundError: If the file doesn't exist
            FileAlreadyUploadedError: If it was already confirmed
            FileAlreadyDeletedError: If it was deleted
        """
        try:
            file, event = self.file_manager.confirm_upload(file_id, owner_id)
        except FileNotFoundError:
            logger.warning(f"File not found: {file_id}")
            raise
        except DomainError as e:
            logger.warning(f"Cannot confirm upload of {file_id}: {e}")
            raise

        self._publish(event)
        return self._file_info(file)

    def delete_file(self, file_id: str, owner_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Soft-delete a file. The record stays in persistence as DELETED.

        Raises:
            FileNotFoundError: If the file doesn't exist
            FileAlreadyDeletedError: If it was already deleted
        """
        try:
            file, event = self.file_manager.soft_delete(file_id, owner_id)
        except FileNotFoundError:
            logger.warning(f"File not found: {file_id}")
            raise
        except DomainError as e:
            logger.warning(f"Cannot delete file {file_id}: {e}")
            raise

        self._publish(event)
        return self._file_info(file)

    def purge_file(self, file_id: str, owner_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Remove a file record from persistence.

        Returns:
            Dictionary with the id and whether a record was removed
        """
        event = self.file_manager.purge(file_id, owner_id)
        if event is None:
            logger.debug(f"Purge requested for unknown file {file_id}")
        self._publish(event)
        return {"id": file_id, "purged": event is not None}

    def get_file(self, file_id: str, owner_id: str) -> Dict[str, Any]:
        """
        Get information about a file owned by ``owner_id``.

        Raises:
            FileNotFoundError: If the file doesn't exist
            FileAccessDeniedError: If the file belongs to someone else
        """
        return self._file_info(self.file_manager.get_owned_file(file_id, owner_id))

    def list_files(self, owner_id: str, include_deleted: bool = False) -> Dict[str, Any]:
        """List an owner's files, newest first."""
        files = self.file_manager.list_files(owner_id, include_deleted=include_deleted)
        return {
            "ownerId": owner_id,
            "files": [self._file_info(f) for f in files],
            "count": len(files),
        }

    def get_download_target(self, file_id: str, owner_id: str) -> Dict[str, Any]:
        """
        Resolve where an uploaded file can be fetched from.

        The result is handed to the collaborator that issues download
        credentials; this service never touches the bytes.

        Raises:
            FileNotDownloadableError: If the file is not UPLOADED
        """
        file = self.file_manager.get_downloadable_file(file_id, owner_id)
        return {
            "id": file.id,
            "container": file.location.container,
            "path": file.location.path,
            "fileName": file.metadata.file_name,
            "mimeType": file.metadata.mime_type,
        }

    @staticmethod
    def error_response(error: Exception) -> Tuple[Dict[str, Any], int]:
        """
        Map a domain or repository error to a response body and status code.

        Unknown errors map to a generic system error.
        """
        context = error.context if isinstance(error, DomainError) else None
        body, status_code = create_error_response(error_category(error), str(error), context)
        if context is not None:
            body["details"] = context
        return body, status_code


def build_file_service(repository: Optional[FileRepository] = None) -> FileService:
    """
    Wire a FileService with its repository, publisher and logging handler.

    Args:
        repository: Repository to use; chosen from the environment when None
    """
    from file_hosting.infrastructure.logging_handler import LoggingEventHandler
    from file_hosting.infrastructure.repository_factory import RepositoryFactory

    if repository is None:
        repository = RepositoryFactory.create_repository()

    publisher = EventPublisher()
    publisher.subscribe(DomainEvent, LoggingEventHandler(logging.getLogger("file_hosting.events")).handle)

    return FileService(FileManager(repository), publisher)

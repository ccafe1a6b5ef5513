"""
File Storage Repositories

Repository interface for file record persistence.
Concrete implementations are in the infrastructure layer.

The contract only covers persistence. It does not transfer bytes,
generate access URLs or know about any particular storage product.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .entities import File
from .value_objects import FileStatus


class FileRepository(ABC):
    """Abstract repository interface for file persistence."""

    @abstractmethod
    def save(self, file: File) -> None:
        """
        Save or update a file (upsert by id).

        Args:
            file: File to save

        Raises:
            RepositoryError: If the storage system fails
        """
        pass

    @abstractmethod
    def find_by_id(self, file_id: str) -> Optional[File]:
        """
        Retrieve a file by id.

        Args:
            file_id: File identifier

        Returns:
            File if found, None otherwise
        """
        pass

    @abstractmethod
    def find_by_owner_id(self, owner_id: str) -> List[File]:
        """
        Retrieve all files of an owner, in any status.

        Args:
            owner_id: Owner identifier

        Returns:
            List of files, newest first. Empty if the owner has none.
        """
        pass

    @abstractmethod
    def delete(self, file_id: str) -> None:
        """
        Remove the persisted record (hard delete).

        Deleting an unknown id is not an error. This is unrelated to
        ``File.mark_as_deleted``, which only changes status.

        Args:
            file_id: File identifier
        """
        pass

    @abstractmethod
    def update_status(self, file_id: str, status: FileStatus) -> None:
        """
        Update only the status of a stored file.

        Args:
            file_id: File identifier
            status: New status

        Raises:
            FileNotFoundError: If no file with that id exists
            RepositoryError: If the storage system fails
        """
        pass

    @abstractmethod
    def exists(self, file_id: str) -> bool:
        """
        Check if a file record exists.

        Args:
            file_id: File identifier

        Returns:
            True if exists, False otherwise
        """
        pass

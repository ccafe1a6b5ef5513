"""
Domain Events

Immutable records of significant state changes in the file lifecycle.
Events decouple side effects (logging, notifications) from core business logic.
"""

from abc import ABC
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Attributes:
        aggregate_id: ID of the file that generated the event
        occurred_at: Timestamp when the event occurred
    """
    aggregate_id: str
    occurred_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert event to dictionary for serialization.

        Returns:
            Dictionary representation of the event
        """
        return {
            "event_type": self.__class__.__name__,
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
        }


@dataclass(frozen=True)
class FileRegisteredEvent(DomainEvent):
    """
    Event emitted when a new upload intent is registered.

    Attributes:
        owner_id: Owner of the new file
        file_name: Original file name
        full_path: Storage location the bytes are expected at
    """
    owner_id: str
    file_name: str
    full_path: str

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            "owner_id": self.owner_id,
            "file_name": self.file_name,
            "full_path": self.full_path,
        })
        return base_dict


@dataclass(frozen=True)
class FileUploadedEvent(DomainEvent):
    """Event emitted when a file transitions to UPLOADED."""
    owner_id: str
    file_size: int

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            "owner_id": self.owner_id,
            "file_size": self.file_size,
        })
        return base_dict


@dataclass(frozen=True)
class FileDeletedEvent(DomainEvent):
    """
    Event emitted when a file is soft-deleted.

    Attributes:
        owner_id: Owner of the file
        previous_status: Status the file had before deletion
    """
    owner_id: str
    previous_status: str

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            "owner_id": self.owner_id,
            "previous_status": self.previous_status,
        })
        return base_dict


@dataclass(frozen=True)
class FilePurgedEvent(DomainEvent):
    """Event emitted when a file record is removed from persistence."""

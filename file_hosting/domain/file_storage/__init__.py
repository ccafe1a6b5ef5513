"""
File Storage Domain

Handles uploaded file records: metadata validation, storage location
and the upload/delete lifecycle.
"""

from .entities import File
from .repositories import FileRepository
from .services import FileManager
from .value_objects import FileLocation, FileMetadata, FileStatus

__all__ = [
    "File",
    "FileLocation",
    "FileManager",
    "FileMetadata",
    "FileRepository",
    "FileStatus",
]

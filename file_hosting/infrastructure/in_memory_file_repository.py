"""
In-Memory File Repository

Process-local FileRepository for development and tests.
Records are stored serialized so callers never share entity instances
with the store.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from file_hosting.domain.errors import FileNotFoundError
from file_hosting.domain.file_storage.entities import File
from file_hosting.domain.file_storage.repositories import FileRepository
from file_hosting.domain.file_storage.value_objects import FileStatus

logger = logging.getLogger(__name__)


class InMemoryFileRepository(FileRepository):
    """Thread-safe dictionary-backed FileRepository."""

    def __init__(self):
        self._records: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def save(self, file: File) -> None:
        with self._lock:
            self._records[file.id] = file.to_dict()
        logger.debug(f"Saved file {file.id} with status {file.status.value}")

    def find_by_id(self, file_id: str) -> Optional[File]:
        with self._lock:
            record = self._records.get(file_id)
        return File.from_dict(record) if record is not None else None

    def find_by_owner_id(self, owner_id: str) -> List[File]:
        with self._lock:
            records = [dict(r) for r in self._records.values() if r["ownerId"] == owner_id]
        files = [File.from_dict(r) for r in records]
        files.sort(key=lambda f: f.metadata.uploaded_at, reverse=True)
        return files

    def delete(self, file_id: str) -> None:
        with self._lock:
            self._records.pop(file_id, None)

    def update_status(self, file_id: str, status: FileStatus) -> None:
        with self._lock:
            record = self._records.get(file_id)
            if record is None:
                raise FileNotFoundError(file_id)
            record["status"] = FileStatus(status).value

    def exists(self, file_id: str) -> bool:
        with self._lock:
            return file_id in self._records

    def clear(self) -> None:
        """Remove every record."""
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

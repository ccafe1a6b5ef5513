"""
Redis File Repository Implementation

Concrete Redis-based implementation of the FileRepository interface.

Layout:
- ``file:<id>`` holds the flat JSON record produced by ``File.to_dict``
- ``owner:<owner_id>:files`` is a sorted set of file ids scored by upload time
"""

import json
import logging
from typing import List, Optional

from redis.exceptions import RedisError

from file_hosting.domain.errors import DomainError, FileNotFoundError, RepositoryError
from file_hosting.domain.file_storage.entities import File
from file_hosting.domain.file_storage.repositories import FileRepository
from file_hosting.domain.file_storage.value_objects import FileStatus

logger = logging.getLogger(__name__)


UPDATE_STATUS_SCRIPT = """
local data = redis.call('GET', KEYS[1])
if not data then
    return 0
end

local record = cjson.decode(data)
record['status'] = ARGV[1]

redis.call('SET', KEYS[1], cjson.encode(record))
return 1
"""


class RedisFileRepository(FileRepository):
    """
    Redis-based implementation of FileRepository.

    Records have no TTL; they live until ``delete`` removes them.
    """

    def __init__(self, redis_repository):
        """
        Initialize with Redis repository.

        Args:
            redis_repository: RedisRepository instance from infrastructure layer
        """
        self.redis_repo = redis_repository
        self.file_prefix = "file"
        self.owner_prefix = "owner"

    def _file_key(self, file_id: str) -> str:
        return f"{self.file_prefix}:{file_id}"

    def _owner_key(self, owner_id: str) -> str:
        return f"{self.owner_prefix}:{owner_id}:files"

    def _to_entity(self, data: dict, file_id: str) -> File:
        try:
            return File.from_dict(data)
        except (DomainError, KeyError, ValueError) as e:
            logger.error(f"Error deserializing file {file_id}: {e}")
            raise RepositoryError(f"Stored record for file {file_id} is invalid", original_error=e) from e

    def save(self, file: File) -> None:
        """Save or update a file and index it under its owner."""
        record = file.to_dict()
        score = file.metadata.uploaded_at.timestamp()

        try:
            pipeline = self.redis_repo.pipeline()
            pipeline.set(self.redis_repo._make_key(self._file_key(file.id)), json.dumps(record))
            pipeline.zadd(
                self.redis_repo._make_key(self._owner_key(file.metadata.owner_id)),
                {file.id: score},
            )
            pipeline.execute()
        except RedisError as e:
            logger.error(f"Error saving file {file.id}: {e}")
            raise RepositoryError(f"Could not save file {file.id}", original_error=e) from e

        logger.debug(f"Saved file {file.id} with status {file.status.value}")

    def find_by_id(self, file_id: str) -> Optional[File]:
        """Retrieve a file from Redis."""
        data = self.redis_repo.get_json(self._file_key(file_id))
        if data is None:
            return None
        return self._to_entity(data, file_id)

    def find_by_owner_id(self, owner_id: str) -> List[File]:
        """
        Retrieve all files of an owner, newest first.

        Index entries whose record is gone are dropped from the index.
        """
        index_key = self.redis_repo._make_key(self._owner_key(owner_id))

        try:
            file_ids = [self.redis_repo.decode(i) for i in self.redis_repo.redis.zrevrange(index_key, 0, -1)]
            if not file_ids:
                return []

            pipeline = self.redis_repo.pipeline(transaction=False)
            for file_id in file_ids:
                pipeline.get(self.redis_repo._make_key(self._file_key(file_id)))
            results = pipeline.execute()
        except RedisError as e:
            logger.error(f"Error listing files for owner {owner_id}: {e}")
            raise RepositoryError(f"Could not list files for owner {owner_id}", original_error=e) from e

        files = []
        stale_ids = []
        for file_id, raw in zip(file_ids, results):
            if raw is None:
                stale_ids.append(file_id)
                continue
            files.append(self._to_entity(self.redis_repo.loads(raw, self._file_key(file_id)), file_id))

        if stale_ids:
            logger.warning(f"Removing {len(stale_ids)} stale index entries for owner {owner_id}")
            try:
                self.redis_repo.redis.zrem(index_key, *stale_ids)
            except RedisError as e:
                logger.warning(f"Could not clean index for owner {owner_id}: {e}")

        return files

    def delete(self, file_id: str) -> None:
        """
        Delete a file record and its owner index entry.

        Unknown ids are ignored.
        """
        data = self.redis_repo.get_json(self._file_key(file_id))
        if data is None:
            logger.debug(f"Delete requested for unknown file {file_id}")
            return

        try:
            pipeline = self.redis_repo.pipeline()
            pipeline.delete(self.redis_repo._make_key(self._file_key(file_id)))
            if data.get("ownerId") is not None:
                pipeline.zrem(self.redis_repo._make_key(self._owner_key(data["ownerId"])), file_id)
            pipeline.execute()
        except RedisError as e:
            logger.error(f"Error deleting file {file_id}: {e}")
            raise RepositoryError(f"Could not delete file {file_id}", original_error=e) from e

    def update_status(self, file_id: str, status: FileStatus) -> None:
        """
        Atomically update a file's status using a Lua script.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        result = self.redis_repo.eval_script(
            UPDATE_STATUS_SCRIPT,
            [self._file_key(file_id)],
            [FileStatus(status).value],
        )
        if result != 1:
            raise FileNotFoundError(file_id)

    def exists(self, file_id: str) -> bool:
        """Check if a file record exists in Redis."""
        return self.redis_repo.exists(self._file_key(file_id))

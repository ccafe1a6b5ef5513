"""
Redis Repository Base Class

Provides JSON reads, script execution and pipelines on top of a Redis
client. Redis failures are logged and re-raised as RepositoryError so
callers can tell them apart from domain errors.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import redis
from redis.exceptions import RedisError

from file_hosting.domain.errors import RepositoryError

logger = logging.getLogger(__name__)


class RedisRepository:
    """Base Redis repository with key prefixing and JSON helpers."""

    def __init__(self, redis_client: redis.Redis, key_prefix: str = ""):
        self.redis = redis_client
        self.key_prefix = key_prefix

    def _make_key(self, key: str) -> str:
        """Create a prefixed key for Redis storage."""
        return f"{self.key_prefix}:{key}" if self.key_prefix else key

    @staticmethod
    def decode(data: Any) -> Any:
        """Decode a raw Redis reply into text when it is bytes."""
        return data.decode("utf-8") if isinstance(data, bytes) else data

    def get_json(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Get JSON data from Redis.

        Args:
            key: Redis key

        Returns:
            Dictionary if found, None if the key does not exist

        Raises:
            RepositoryError: If Redis fails or the stored value is not valid JSON
        """
        redis_key = self._make_key(key)
        try:
            data = self.redis.get(redis_key)
        except RedisError as e:
            logger.error(f"Error getting JSON data for key {key}: {e}")
            raise RepositoryError(f"Could not read key {key}", original_error=e) from e

        if data is None:
            return None

        return self.loads(data, key)

    def loads(self, data: Any, key: str) -> Dict[str, Any]:
        """Parse a raw JSON reply stored under ``key``."""
        try:
            return json.loads(self.decode(data))
        except json.JSONDecodeError as e:
            logger.error(f"Corrupt JSON data for key {key}: {e}")
            raise RepositoryError(f"Corrupt data stored at key {key}", original_error=e) from e

    def exists(self, key: str) -> bool:
        """Check if a key exists in Redis."""
        try:
            return self.redis.exists(self._make_key(key)) > 0
        except RedisError as e:
            logger.error(f"Error checking existence of key {key}: {e}")
            raise RepositoryError(f"Could not check key {key}", original_error=e) from e

    def eval_script(self, script: str, keys: List[str], args: List[Any]) -> Any:
        """
        Run a Lua script atomically against prefixed keys.

        Args:
            script: Lua source
            keys: Unprefixed key names passed as KEYS
            args: Values passed as ARGV
        """
        redis_keys = [self._make_key(k) for k in keys]
        try:
            return self.redis.eval(script, len(redis_keys), *redis_keys, *args)
        except RedisError as e:
            logger.error(f"Error running script on keys {keys}: {e}")
            raise RepositoryError(f"Could not update keys {keys}", original_error=e) from e

    def pipeline(self, transaction: bool = True):
        """Create a Redis pipeline; keys must be prefixed with ``_make_key``."""
        return self.redis.pipeline(transaction=transaction)


class RedisConnectionManager:
    """Manages Redis connection with connection pooling."""

    def __init__(self, host: str = 'localhost', port: int = 6379, db: int = 0,
                 password: Optional[str] = None, max_connections: int = 20,
                 decode_responses: bool = False):
        self.connection_pool = redis.ConnectionPool(
            host=host,
            port=port,
            db=db,
            password=password,
            max_connections=max_connections,
            decode_responses=decode_responses,
            retry_on_timeout=True,
            socket_keepalive=True,
        )
        self._client = None

    @property
    def client(self) -> redis.Redis:
        """Get Redis client instance with connection pooling."""
        if self._client is None:
            self._client = redis.Redis(connection_pool=self.connection_pool)
        return self._client

    def health_check(self) -> bool:
        """Check if Redis connection is healthy."""
        try:
            return self.client.ping()
        except RedisError:
            return False

    def close(self):
        """Close the connection pool."""
        if self.connection_pool:
            self.connection_pool.disconnect()

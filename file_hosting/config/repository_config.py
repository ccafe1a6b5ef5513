"""
Repository Configuration

Everything needed to build the file repository, read once from the
environment: the backend, the key namespace and, for Redis, where the
server lives. The Redis connection pool is opened here and shared by
every repository built from it.
"""

import os
from typing import Any, Dict, Optional

import redis

from file_hosting.infrastructure.redis_repository import RedisConnectionManager


class RepositoryConfig:
    """
    File repository settings.

    Environment:
        FILE_REPOSITORY_BACKEND: "memory" (default) or "redis"
        FILE_KEY_PREFIX: namespace for every Redis key
        REDIS_URL: redis://[:password@]host:port/db, overrides the parts below
        REDIS_HOST, REDIS_PORT, REDIS_DB, REDIS_PASSWORD, REDIS_MAX_CONNECTIONS
    """

    def __init__(self):
        self.backend = os.getenv("FILE_REPOSITORY_BACKEND", "memory").lower()
        self.key_prefix = os.getenv("FILE_KEY_PREFIX", "file_hosting")
        self.max_connections = int(os.getenv("REDIS_MAX_CONNECTIONS", 20))

        url = os.getenv("REDIS_URL")
        url_params = redis.connection.parse_url(url) if url else {}
        self.host = url_params.get("host", os.getenv("REDIS_HOST", "localhost"))
        self.port = int(url_params.get("port", os.getenv("REDIS_PORT", 6379)))
        self.db = int(url_params.get("db", os.getenv("REDIS_DB", 0)))
        self.password = url_params.get("password", os.getenv("REDIS_PASSWORD"))

    def redis_connection_kwargs(self) -> Dict[str, Any]:
        return {
            "host": self.host,
            "port": self.port,
            "db": self.db,
            "password": self.password,
            "max_connections": self.max_connections,
        }

    def redis_address(self) -> str:
        """host:port/db, safe to log."""
        return f"{self.host}:{self.port}/{self.db}"


_redis_manager: Optional[RedisConnectionManager] = None


def connect_redis(config: RepositoryConfig) -> RedisConnectionManager:
    """
    Open the shared Redis connection pool for ``config``.

    A pool opened earlier is closed first.
    """
    global _redis_manager

    close_redis()
    _redis_manager = RedisConnectionManager(**config.redis_connection_kwargs())
    return _redis_manager


def close_redis() -> None:
    """Close the shared connection pool, if any."""
    global _redis_manager

    if _redis_manager is not None:
        _redis_manager.close()
        _redis_manager = None

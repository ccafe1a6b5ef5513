"""
Repository Factory

Selects the FileRepository implementation from RepositoryConfig so the
application layer depends only on the FileRepository interface.
"""

import logging
from typing import Optional

from file_hosting.config.repository_config import RepositoryConfig, connect_redis
from file_hosting.domain.file_storage.repositories import FileRepository
from file_hosting.infrastructure.in_memory_file_repository import InMemoryFileRepository
from file_hosting.infrastructure.redis_file_repository import RedisFileRepository
from file_hosting.infrastructure.redis_repository import RedisRepository

logger = logging.getLogger(__name__)


class RepositoryFactory:
    """
    Factory for creating file repository implementations.

    Selection Logic:
    - backend "redis" uses Redis, namespaced by the configured key prefix
    - backend "memory" (default) uses a process-local store
    """

    BACKENDS = ("memory", "redis")

    @staticmethod
    def create_repository(
        backend: Optional[str] = None, config: Optional[RepositoryConfig] = None
    ) -> FileRepository:
        """
        Create file repository based on configuration.

        Args:
            backend: Backend name; overrides the configured one
            config: Settings; read from the environment when None

        Returns:
            FileRepository implementation

        Raises:
            ValueError: If the backend name is unknown
        """
        config = config or RepositoryConfig()
        backend = (backend or config.backend).lower()

        if backend == "redis":
            return RepositoryFactory._create_redis_repository(config)
        if backend == "memory":
            logger.info("Using in-memory file repository")
            return InMemoryFileRepository()

        raise ValueError(
            f"Unknown file repository backend '{backend}'. "
            f"Expected one of: {', '.join(RepositoryFactory.BACKENDS)}"
        )

    @staticmethod
    def _create_redis_repository(config: RepositoryConfig) -> FileRepository:
        manager = connect_redis(config)
        if not manager.health_check():
            logger.warning(f"Redis at {config.redis_address()} is not reachable yet")

        logger.info(f"Using Redis file repository at {config.redis_address()}")
        return RedisFileRepository(RedisRepository(manager.client, config.key_prefix))

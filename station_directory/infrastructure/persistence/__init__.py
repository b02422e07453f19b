"""
Persistence adapters.

- JsonFileBackend → whole-file JSON collections under DATA_DIR
- RedisBackend    → one key per user/message plus chat-pair indices
"""

from redis.exceptions import RedisError

from station_directory.config.settings import Config
from station_directory.domain.exceptions import StorageUnavailableError
from station_directory.domain.ports.persistence_backend import PersistenceBackend
from station_directory.infrastructure.cache.redis_client import create_redis_client
from station_directory.infrastructure.persistence.json_file_backend import JsonFileBackend
from station_directory.infrastructure.persistence.redis_backend import RedisBackend

BACKENDS = ("file", "redis")


async def create_persistence_backend(config: type[Config] = Config) -> PersistenceBackend:
    """
    Build the backend named by ``config.STORAGE_BACKEND``.

    Raises:
        ValueError: If the name is not one of BACKENDS
        StorageUnavailableError: If the redis backend cannot reach the server
    """
    if config.STORAGE_BACKEND == "file":
        return JsonFileBackend(
            data_dir=config.DATA_DIR,
            users_file=config.USERS_FILE,
            messages_file=config.MESSAGES_FILE,
            conflict_check=config.FILE_CONFLICT_CHECK,
        )
    if config.STORAGE_BACKEND == "redis":
        try:
            client = await create_redis_client(config.REDIS_URL)
        except RedisError as e:
            raise StorageUnavailableError(f"Cannot connect to Redis: {e}") from e
        return RedisBackend(client, key_prefix=config.REDIS_KEY_PREFIX)
    raise ValueError(
        f"Unknown STORAGE_BACKEND {config.STORAGE_BACKEND!r}, expected one of {BACKENDS}"
    )


__all__ = [
    "BACKENDS",
    "JsonFileBackend",
    "RedisBackend",
    "create_persistence_backend",
]

"""Backend selection.

The backend is chosen explicitly by the caller; nothing here probes for
an available Redis server or client library.
"""

import redis

from readthrough_cache.config import Backend, Settings, settings
from readthrough_cache.protocols import CacheStore

from .memory_repository import InMemoryCacheRepository
from .redis_repository import RedisCacheRepository


def create_repository(
    backend: Backend | str | None = None,
    key_prefix: str | None = None,
    redis_client: redis.Redis | None = None,
    config: Settings | None = None,
) -> CacheStore:
    """Build the CacheStore for ``backend``.

    Args:
        backend: Backend to use. Defaults to the configured backend.
        key_prefix: Key prefix. Defaults to the configured prefix.
        redis_client: Client for the Redis backend. If None, one is created
            from the configured URL.
        config: Settings to read defaults from. Defaults to global settings.

    Returns:
        A repository satisfying CacheStore

    Raises:
        ValueError: If ``backend`` is not a known backend
    """
    config = config or settings
    selected = Backend(backend.lower()) if backend is not None else config.backend
    prefix = key_prefix or config.cache_key_prefix

    if selected is Backend.REDIS:
        if redis_client is None:
            return RedisCacheRepository.create(
                redis_url=config.redis_url,
                redis_password=config.redis_password,
                key_prefix=prefix,
            )
        return RedisCacheRepository(redis_client=redis_client, key_prefix=prefix)

    return InMemoryCacheRepository.create(key_prefix=prefix)

"""Read-Through Cache - lazily populated cache with a pluggable backing store.

Layers:
    - protocols: Interface contracts (CacheStore, Loader)
    - repositories: Backing stores and the filesystem loader
    - services: The read-through cache itself
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from readthrough_cache import Backend, ReadThroughCache

    cache = ReadThroughCache.create()                       # in-process dict
    cache = ReadThroughCache.create(backend=Backend.REDIS)  # Redis
    cache.read("a.txt")
    cache.clear()
    ```

For HTTP API:
    ```python
    from readthrough_cache.api.app import app
    ```
"""

from readthrough_cache.config import Backend, Settings, get_redis_client, settings
from readthrough_cache.entities import CacheEntryEntity, CacheReadEntity
from readthrough_cache.log_config import configure_logging, get_logger
from readthrough_cache.protocols import CacheStore, Loader
from readthrough_cache.repositories import (
    FileContentLoader,
    InMemoryCacheRepository,
    RedisCacheRepository,
    create_repository,
)
from readthrough_cache.services import ReadThroughCache

__all__ = [
    # Configuration
    "Backend",
    "Settings",
    "settings",
    "get_redis_client",
    # Logging
    "configure_logging",
    "get_logger",
    # Protocols (interfaces)
    "CacheStore",
    "Loader",
    # Services (business logic)
    "ReadThroughCache",
    # Repositories (data access)
    "InMemoryCacheRepository",
    "RedisCacheRepository",
    "FileContentLoader",
    "create_repository",
    # Entities (domain models)
    "CacheEntryEntity",
    "CacheReadEntity",
]

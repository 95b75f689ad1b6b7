"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Swapping the backing store (in-process dict -> Redis) without touching the service
- Unit testing with fake stores and counting loaders

Usage:
    ```python
    from readthrough_cache.protocols import CacheStore, Loader

    store: CacheStore = InMemoryCacheRepository()
    store: CacheStore = RedisCacheRepository.create()
    loader: Loader = FileContentLoader(root="docs")
    ```
"""

from .cache_store import CacheStore
from .loader import Loader

__all__ = [
    "CacheStore",
    "Loader",
]

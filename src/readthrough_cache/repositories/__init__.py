"""Repository layer for data access.

This layer hides the backing stores (in-process dict, Redis) and the
filesystem behind protocol-based interfaces. The repositories are
protocol-based (structural typing), not inheritance-based.
"""

from readthrough_cache.protocols import CacheStore, Loader

from .factory import create_repository
from .file_loader import FileContentLoader
from .memory_repository import InMemoryCacheRepository
from .redis_repository import RedisCacheRepository

__all__ = [
    "CacheStore",
    "Loader",
    "create_repository",
    "FileContentLoader",
    "InMemoryCacheRepository",
    "RedisCacheRepository",
]

"""Read-through cache service.

This service coordinates a backing store (repository) and a loader: reads
are answered from the store when possible and populate it on a miss.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

import redis

from readthrough_cache.config import Backend
from readthrough_cache.entities import CacheReadEntity
from readthrough_cache.log_config import get_logger
from readthrough_cache.protocols import CacheStore, Loader
from readthrough_cache.repositories import FileContentLoader, create_repository

log = get_logger("readthrough_cache.service")


class ReadThroughCache:
    """Lazily populated cache in front of an expensive loader.

    This service depends on PROTOCOLS, not concrete implementations:
    - CacheStore: in-process dict or Redis
    - Loader: any callable ``key -> value``

    Entries are never invalidated on their own. A key maps to whatever the
    loader returned the first time it was read until ``clear()`` or
    ``flush_all()`` runs.

    Concurrent misses on the same key inside one process are serialized by
    a per-key lock, so the loader runs at most once per key. Processes
    sharing one Redis can still both load the same key.

    Example:
        ```python
        from readthrough_cache.services import ReadThroughCache

        # In-process store, files under ./docs
        cache = ReadThroughCache.create(loader=FileContentLoader(root="docs"))
        cache.read("a.txt")  # loads from disk
        cache.read("a.txt")  # served from the store

        # Or with explicit implementations
        cache = ReadThroughCache(
            repository=RedisCacheRepository.create(),
            loader=lambda key: expensive_lookup(key),
        )
        ```
    """

    def __init__(self, repository: CacheStore, loader: Loader) -> None:
        """Initialize the cache.

        Args:
            repository: Backing store (required).
            loader: Produces the value for a key on a miss (required).
        """
        self._repository = repository
        self._loader = loader

        self._locks: dict[str, list] = {}
        self._locks_guard = threading.Lock()

        self._stats_lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._loads = 0

    @classmethod
    def create(
        cls,
        loader: Loader | None = None,
        backend: Backend | str | None = None,
        key_prefix: str | None = None,
        redis_client: redis.Redis | None = None,
    ) -> "ReadThroughCache":
        """Factory method to create ReadThroughCache with sensible defaults.

        Args:
            loader: Loader for misses. If None, reads files under the
                configured source root.
            backend: Backend to store entries in. If None, uses settings.
            key_prefix: Key prefix. If None, uses settings.
            redis_client: Client for the Redis backend. If None and the
                backend is Redis, one is created from settings.

        Returns:
            Configured ReadThroughCache instance
        """
        repository = create_repository(
            backend=backend,
            key_prefix=key_prefix,
            redis_client=redis_client,
        )
        return cls(
            repository=repository,
            loader=loader or FileContentLoader.create(),
        )

    @contextmanager
    def _key_lock(self, key: str) -> Iterator[None]:
        # slot is [lock, number of threads holding or waiting on it]
        with self._locks_guard:
            slot = self._locks.get(key)
            if slot is None:
                slot = self._locks[key] = [threading.Lock(), 0]
            slot[1] += 1
        try:
            with slot[0]:
                yield
        finally:
            with self._locks_guard:
                slot[1] -= 1
                if slot[1] == 0:
                    del self._locks[key]

    def _record(self, hit: bool) -> None:
        with self._stats_lock:
            if hit:
                self._hits += 1
            else:
                self._misses += 1

    def lookup(self, key: str) -> CacheReadEntity:
        """Read ``key`` and report whether it was a hit.

        Business logic:
        1. Return the stored value if present
        2. Otherwise take the key's lock and check the store again
        3. Still missing: run the loader, store the result, return it

        Args:
            key: The key to read

        Returns:
            CacheReadEntity with the value and hit flag

        Raises:
            Exception: Whatever the loader or the backing store raises,
                unchanged. Nothing is stored when the loader fails.
        """
        value = self._repository.get(key)
        if value is not None:
            self._record(hit=True)
            log.debug("cache.hit", key=key)
            return CacheReadEntity(key=key, value=value, hit=True)

        with self._key_lock(key):
            # Another thread may have loaded it while we waited
            value = self._repository.get(key)
            if value is not None:
                self._record(hit=True)
                log.debug("cache.hit", key=key, waited=True)
                return CacheReadEntity(key=key, value=value, hit=True)

            log.debug("cache.miss", key=key)
            with self._stats_lock:
                self._loads += 1
            try:
                value = self._loader(key)
            except Exception as e:
                log.warning("cache.load_failed", key=key, error=str(e))
                raise
            self._repository.set(key, value)
            self._record(hit=False)

        return CacheReadEntity(key=key, value=value, hit=False)

    def read(self, key: str) -> str:
        """Return the value for ``key``, loading and storing it on a miss.

        Args:
            key: The key to read

        Returns:
            The cached or freshly loaded value
        """
        return self.lookup(key).value

    def contains(self, key: str) -> bool:
        """Check whether ``key`` is cached, without loading it."""
        return self._repository.exists(key)

    def clear(self) -> bool:
        """Remove every entry of this cache.

        Returns:
            True once the store is empty
        """
        count = self._repository.clear_namespace()
        log.info("cache.cleared", deleted=count)
        return True

    def flush_all(self) -> bool:
        """Remove every entry of this cache.

        Same scope as ``clear()``; routed to the store's flush primitive.

        Returns:
            True once the store is empty
        """
        count = self._repository.flush_all()
        log.info("cache.flushed", deleted=count)
        return True

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        stats = self._repository.get_stats()
        with self._stats_lock:
            stats["hits"] = self._hits
            stats["misses"] = self._misses
            stats["loads"] = self._loads
        return stats

    def reset_stats(self) -> None:
        """Reset hit/miss counters."""
        with self._stats_lock:
            self._hits = 0
            self._misses = 0
            self._loads = 0

    def is_healthy(self) -> bool:
        """Check if the backing store is reachable."""
        return self._repository.health_check()

    @property
    def hits(self) -> int:
        """Number of reads served from the store."""
        return self._hits

    @property
    def misses(self) -> int:
        """Number of reads that ran the loader."""
        return self._misses

    @property
    def loads(self) -> int:
        """Number of loader invocations, failed ones included."""
        return self._loads

    @property
    def repository(self) -> CacheStore:
        """Get the underlying repository (for testing)."""
        return self._repository

    @property
    def loader(self) -> Loader:
        """Get the underlying loader (for testing)."""
        return self._loader

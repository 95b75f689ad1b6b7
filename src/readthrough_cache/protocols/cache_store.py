"""Cache storage protocol.

Defines the interface for any key-value backend that can hold the entries
of a read-through cache.

Implementations:
- In-process dict (default)
- Redis
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache storage backends.

    Keys passed in are unprefixed; every implementation namespaces them
    with its own key prefix before touching storage.

    Example:
        ```python
        from readthrough_cache.protocols import CacheStore

        repo: CacheStore = InMemoryCacheRepository()
        repo: CacheStore = RedisCacheRepository.create()
        ```
    """

    def get(self, key: str) -> str | None:
        """Return the stored value for ``key``, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, overwriting any previous value."""
        ...

    def exists(self, key: str) -> bool:
        """Check whether ``key`` is stored."""
        ...

    def clear_namespace(self) -> int:
        """Delete every key under this store's prefix.

        Returns:
            Number of entries deleted
        """
        ...

    def flush_all(self) -> int:
        """Delete every entry owned by this store.

        Returns:
            Number of entries deleted
        """
        ...

    def count_all(self) -> int:
        """Count entries under this store's prefix."""
        ...

    def health_check(self) -> bool:
        """Check if the backend is accessible."""
        ...

    def get_stats(self) -> dict:
        """Get repository statistics (implementation-specific)."""
        ...

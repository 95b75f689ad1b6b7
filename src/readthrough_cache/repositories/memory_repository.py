"""In-process implementation of CacheStore.

Entries live in a plain dict and disappear with the process.
"""

import threading

from readthrough_cache.config import settings


class InMemoryCacheRepository:
    """Dict-backed cache storage.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, key_prefix: str | None = None) -> None:
        """Initialize the in-memory repository.

        Args:
            key_prefix: Literal prepended to every key. Defaults to settings.
        """
        self._prefix = key_prefix or settings.cache_key_prefix
        self._store: dict[str, str] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(cls, key_prefix: str | None = None) -> "InMemoryCacheRepository":
        """Factory method to create InMemoryCacheRepository with defaults."""
        return cls(key_prefix=key_prefix)

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._store.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._store[self._key(key)] = value

    def exists(self, key: str) -> bool:
        with self._lock:
            return self._key(key) in self._store

    def clear_namespace(self) -> int:
        """Delete every key under the prefix.

        Returns:
            Number of entries deleted
        """
        with self._lock:
            keys = [k for k in self._store if k.startswith(self._prefix)]
            for k in keys:
                del self._store[k]
        return len(keys)

    def flush_all(self) -> int:
        """Drop the whole mapping.

        Returns:
            Number of entries deleted
        """
        with self._lock:
            count = len(self._store)
            self._store.clear()
        return count

    def count_all(self) -> int:
        with self._lock:
            return len(self._store)

    def health_check(self) -> bool:
        return True

    def get_stats(self) -> dict:
        return {
            "backend": "memory",
            "key_prefix": self._prefix,
            "total_entries": self.count_all(),
        }

    @property
    def key_prefix(self) -> str:
        """Get the key prefix."""
        return self._prefix

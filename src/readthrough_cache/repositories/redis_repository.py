"""Redis implementation of CacheStore.

Values are stored as plain strings under ``<prefix><key>``. Clearing only
ever touches keys under the prefix, so the cache can share a Redis database
with unrelated data.
"""

import re

import redis

from readthrough_cache.config import get_redis_client, settings


class RedisCacheRepository:
    """Redis-backed cache storage.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Entries have no TTL: they live until cleared or until Redis evicts them.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
        scan_count: int = 500,
    ) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: Redis client instance. If None, creates default.
            key_prefix: Literal prepended to every key. Defaults to settings.
            scan_count: COUNT hint for SCAN and the delete batch size.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.cache_key_prefix
        self._scan_count = scan_count

    @classmethod
    def create(
        cls,
        redis_url: str | None = None,
        redis_password: str | None = None,
        key_prefix: str | None = None,
    ) -> "RedisCacheRepository":
        """Factory method to create RedisCacheRepository with defaults.

        Args:
            redis_url: Redis URL. If None, uses settings.
            redis_password: Redis password. If None, uses settings.
            key_prefix: Key prefix. If None, uses settings.

        Returns:
            Configured RedisCacheRepository
        """
        return cls(
            redis_client=get_redis_client(redis_url, redis_password),
            key_prefix=key_prefix,
        )

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def _match(self) -> str:
        # SCAN MATCH is a glob; the prefix must match literally
        return re.sub(r"([*?\[\]\\])", r"\\\1", self._prefix) + "*"

    def get(self, key: str) -> str | None:
        """Get the value stored under ``key``.

        Args:
            key: Unprefixed cache key

        Returns:
            The stored value, or None if absent
        """
        value = self._client.get(self._key(key))
        if isinstance(value, bytes):
            # Client built without decode_responses
            return value.decode()
        return value  # type: ignore[return-value]

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key`` with no expiry."""
        self._client.set(self._key(key), value)

    def exists(self, key: str) -> bool:
        result: int = self._client.exists(self._key(key))  # type: ignore[assignment]
        return result > 0

    def clear_namespace(self) -> int:
        """Delete keys under the prefix in SCAN-sized batches.

        Returns:
            Number of entries deleted
        """
        count = 0
        batch: list[str] = []
        for key in self._client.scan_iter(match=self._match(), count=self._scan_count):
            batch.append(key)
            if len(batch) >= self._scan_count:
                count += self._client.delete(*batch)  # type: ignore[operator]
                batch = []
        if batch:
            count += self._client.delete(*batch)  # type: ignore[operator]
        return count

    def flush_all(self) -> int:
        """Unlink every key under the prefix in a single pipeline.

        FLUSHDB is never issued; keys outside the prefix survive.

        Returns:
            Number of entries deleted
        """
        keys = list(self._client.scan_iter(match=self._match(), count=self._scan_count))
        if not keys:
            return 0

        pipe = self._client.pipeline()
        for key in keys:
            pipe.unlink(key)
        results = pipe.execute()
        return sum(int(r) for r in results)

    def count_all(self) -> int:
        """Count keys under the prefix."""
        count = 0
        for _ in self._client.scan_iter(match=self._match(), count=self._scan_count):
            count += 1
        return count

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.exceptions.RedisError:
            return False

    def get_stats(self) -> dict:
        """Get repository statistics.

        Returns:
            Dictionary with stats
        """
        return {
            "backend": "redis",
            "key_prefix": self._prefix,
            "total_entries": self.count_all(),
        }

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client

    @property
    def key_prefix(self) -> str:
        """Get the key prefix."""
        return self._prefix

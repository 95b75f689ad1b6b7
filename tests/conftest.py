"""
Shared fixtures for the read-through cache tests.
"""

import re
import threading

import pytest
import redis

from readthrough_cache.repositories import InMemoryCacheRepository, RedisCacheRepository
from readthrough_cache.services import ReadThroughCache


def redis_glob_to_regex(pattern: str) -> re.Pattern:
    """Translate a Redis MATCH glob, backslash escapes included."""
    out = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\" and i + 1 < len(pattern):
            out.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if ch == "*":
            out.append(".*")
        elif ch == "?":
            out.append(".")
        elif ch == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                out.append(re.escape(ch))
            else:
                body = pattern[i + 1 : end]
                if body.startswith("^"):
                    body = "^" + re.escape(body[1:])
                else:
                    body = re.escape(body)
                out.append(f"[{body}]")
                i = end
        else:
            out.append(re.escape(ch))
        i += 1
    return re.compile("".join(out) + r"\Z", re.DOTALL)


class FakePipeline:
    """Queues UNLINK calls and applies them on execute()."""

    def __init__(self, client: "FakeRedis") -> None:
        self._client = client
        self._ops: list[str] = []

    def unlink(self, key: str) -> "FakePipeline":
        self._ops.append(key)
        return self

    def execute(self) -> list[int]:
        results = [self._client.unlink(key) for key in self._ops]
        self._ops = []
        return results


class FakeRedis:
    """Minimal dict-backed stand-in for redis.Redis(decode_responses=True)."""

    def __init__(self, healthy: bool = True) -> None:
        self.data: dict[str, str] = {}
        self.healthy = healthy

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> bool:
        self.data[key] = str(value)
        return True

    def exists(self, *keys: str) -> int:
        return sum(1 for k in keys if k in self.data)

    def delete(self, *keys: str) -> int:
        return sum(1 for k in keys if self.data.pop(k, None) is not None)

    def unlink(self, *keys: str) -> int:
        return self.delete(*keys)

    def scan_iter(self, match: str | None = None, count: int | None = None):
        regex = redis_glob_to_regex(match) if match is not None else None
        for key in list(self.data):
            if regex is None or regex.match(key):
                yield key

    def pipeline(self) -> FakePipeline:
        return FakePipeline(self)

    def ping(self) -> bool:
        if not self.healthy:
            raise redis.exceptions.ConnectionError("Connection refused")
        return True


class CountingLoader:
    """Loader returning canned values and recording every call."""

    def __init__(self, values: dict[str, str]) -> None:
        self.values = values
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def __call__(self, key: str) -> str:
        with self._lock:
            self.calls.append(key)
        if key not in self.values:
            raise FileNotFoundError(key)
        return self.values[key]

    def count(self, key: str) -> int:
        return self.calls.count(key)


@pytest.fixture
def fake_redis() -> FakeRedis:
    """Create an empty fake Redis client."""
    return FakeRedis()


@pytest.fixture
def loader() -> CountingLoader:
    """Loader for two small text files."""
    return CountingLoader({"a.txt": "hello", "b.txt": "world"})


@pytest.fixture(params=["memory", "redis"])
def repository(request, fake_redis):
    """Each backing store, namespaced under 'cache:'."""
    if request.param == "redis":
        return RedisCacheRepository(redis_client=fake_redis, key_prefix="cache:")
    return InMemoryCacheRepository(key_prefix="cache:")


@pytest.fixture
def cache(repository, loader) -> ReadThroughCache:
    """Read-through cache over each backing store."""
    return ReadThroughCache(repository=repository, loader=loader)

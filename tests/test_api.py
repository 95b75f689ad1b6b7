"""
Tests for the read-through cache API.
"""

import asyncio
import json
import logging

import pytest
from fastapi.testclient import TestClient

from readthrough_cache.api.app import create_app
from readthrough_cache.config import Settings
from readthrough_cache.repositories import (
    FileContentLoader,
    InMemoryCacheRepository,
    RedisCacheRepository,
)
from readthrough_cache.services import ReadThroughCache

from conftest import FakeRedis


@pytest.fixture
def source_dir(tmp_path):
    """Directory served by the loader."""
    (tmp_path / "a.txt").write_text("hello", encoding="utf-8")
    (tmp_path / "b.txt").write_text("world", encoding="utf-8")
    (tmp_path / "sub").mkdir()
    (tmp_path / "latin1.txt").write_bytes(b"caf\xe9 \xff")
    return tmp_path


@pytest.fixture
def cache(source_dir):
    """In-process cache over the source directory."""
    return ReadThroughCache(
        repository=InMemoryCacheRepository(key_prefix="cache:"),
        loader=FileContentLoader(root=source_dir),
    )


@pytest.fixture
def client(cache):
    """Create a test client with lifespan running."""
    with TestClient(create_app(cache=cache)) as test_client:
        yield test_client


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Read-Through Cache API"
    assert "read" in data["endpoints"]


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "cache_healthy": True}


def test_health_unreachable_redis(source_dir):
    """Unreachable Redis reports 503."""
    cache = ReadThroughCache(
        repository=RedisCacheRepository(redis_client=FakeRedis(healthy=False), key_prefix="cache:"),
        loader=FileContentLoader(root=source_dir),
    )
    with TestClient(create_app(cache=cache)) as client:
        response = client.get("/health")
    assert response.status_code == 503


def test_read_miss_then_hit(client):
    """First read loads, second read hits."""
    first = client.post("/cache/read", json={"key": "a.txt"})
    assert first.status_code == 200
    assert first.json()["value"] == "hello"
    assert first.json()["hit"] is False

    second = client.post("/cache/read", json={"key": "a.txt"})
    assert second.json()["hit"] is True
    assert second.json()["value"] == "hello"


def test_read_missing_source(client):
    """A missing file is a 404 and is not cached."""
    response = client.post("/cache/read", json={"key": "missing.txt"})
    assert response.status_code == 404


def test_read_outside_root(client):
    """Keys escaping the source root are rejected."""
    response = client.post("/cache/read", json={"key": "../etc/passwd"})
    assert response.status_code == 400


def test_read_empty_key(client):
    """Empty keys fail validation."""
    response = client.post("/cache/read", json={"key": ""})
    assert response.status_code == 422


@pytest.mark.parametrize(
    ("method", "path"),
    [("delete", "/cache"), ("post", "/cache/flush")],
)
def test_clear_and_flush(client, cache, method, path):
    """Both clear endpoints empty the cache."""
    client.post("/cache/read", json={"key": "a.txt"})
    client.post("/cache/read", json={"key": "b.txt"})

    response = getattr(client, method)(path)
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert cache.repository.count_all() == 0

    again = client.post("/cache/read", json={"key": "a.txt"})
    assert again.json()["hit"] is False


def test_get_stats(client):
    """Stats reflect reads."""
    client.post("/cache/read", json={"key": "a.txt"})
    client.post("/cache/read", json={"key": "a.txt"})

    response = client.get("/stats")
    assert response.status_code == 200
    data = response.json()
    assert data == {
        "backend": "memory",
        "key_prefix": "cache:",
        "total_entries": 1,
        "hits": 1,
        "misses": 1,
        "loads": 1,
    }

    client.post("/stats/reset")
    assert client.get("/stats").json()["hits"] == 0


@pytest.mark.parametrize("key", ["sub", "."])
def test_read_directory(client, key):
    """A key naming a directory is not found, not a server error."""
    response = client.post("/cache/read", json={"key": key})
    assert response.status_code == 404


def test_read_undecodable_source(client, cache):
    """A file that is not valid text is reported as such and not cached."""
    response = client.post("/cache/read", json={"key": "latin1.txt"})
    assert response.status_code == 415
    assert "utf-8" in response.json()["detail"]
    assert not cache.contains("latin1.txt")


def test_loader_runs_off_the_event_loop(source_dir):
    """Blocking loads run in the threadpool, not on the event loop."""
    seen = []

    def load(key):
        try:
            asyncio.get_running_loop()
            seen.append("event loop")
        except RuntimeError:
            seen.append("worker thread")
        return "content"

    cache = ReadThroughCache(repository=InMemoryCacheRepository(key_prefix="cache:"), loader=load)
    with TestClient(create_app(cache=cache)) as test_client:
        response = test_client.post("/cache/read", json={"key": "a.txt"})

    assert response.status_code == 200
    assert seen == ["worker thread"]


def test_logging_configured_from_settings(cache, capsys):
    """Startup applies LOG_FORMAT, so served apps emit JSON logs."""
    config = Settings(log_level="INFO", log_format="json")
    try:
        with TestClient(create_app(cache=cache, config=config)) as test_client:
            test_client.delete("/cache")
        err = capsys.readouterr().err
    finally:
        logging.getLogger().handlers = []

    events = []
    for line in err.splitlines():
        try:
            events.append(json.loads(line))
        except json.JSONDecodeError:
            continue

    names = [e.get("event") for e in events]
    assert "api.started" in names
    assert "cache.cleared" in names
    started = next(e for e in events if e.get("event") == "api.started")
    assert started["level"] == "info"

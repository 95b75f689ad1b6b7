"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - The cache is built once during lifespan and stored in app.state
    - Dependency functions retrieve it from request.app.state
    - No module-level cache instance
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from readthrough_cache.config import Settings, settings
from readthrough_cache.handlers import CacheHandler
from readthrough_cache.log_config import configure_logging, get_logger
from readthrough_cache.repositories import FileContentLoader, create_repository
from readthrough_cache.services import ReadThroughCache

log = get_logger("readthrough_cache.api")


def get_cache(request: Request) -> ReadThroughCache:
    """Dependency injection for ReadThroughCache from app.state.

    Raises:
        RuntimeError: If the cache is not initialized
    """
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        raise RuntimeError("ReadThroughCache not initialized. Check lifespan setup.")
    return cache


def get_handler(request: Request) -> CacheHandler:
    """Dependency injection for CacheHandler from app.state.

    Raises:
        RuntimeError: If the handler is not initialized
    """
    handler = getattr(request.app.state, "cache_handler", None)
    if handler is None:
        raise RuntimeError("CacheHandler not initialized. Check lifespan setup.")
    return handler


def build_cache(config: Settings | None = None) -> ReadThroughCache:
    """Build the cache from settings.

    The backend is whatever CACHE_BACKEND names; an unreachable Redis is
    reported by /health rather than silently replaced.
    """
    config = config or settings
    repository = create_repository(backend=config.backend, config=config)
    loader = FileContentLoader.create(
        root=config.source_root,
        encoding=config.source_encoding,
    )
    return ReadThroughCache(repository=repository, loader=loader)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Configures logging from the app's settings, so LOG_LEVEL and
    LOG_FORMAT apply however the app is served (uvicorn CLI, reload
    workers, TestClient).

    Stores in app.state:
    1. cache - a ReadThroughCache, either preset by create_app or built
       from settings
    2. cache_handler - the CacheHandler wrapping it

    Cleanup:
        Removes both from app.state on shutdown
    """
    config = getattr(app.state, "settings", None) or settings
    configure_logging(level=config.log_level, log_format=config.log_format)

    preset = getattr(app.state, "cache", None)
    cache = preset or build_cache(config)

    app.state.cache = cache
    app.state.cache_handler = CacheHandler(cache=cache)

    log.info(
        "api.started",
        repository=type(cache.repository).__name__,
        healthy=cache.is_healthy(),
    )

    yield

    del app.state.cache_handler
    if preset is None:
        del app.state.cache
    log.info("api.stopped")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[CacheHandler, Depends(get_handler)]
CacheDep = Annotated[ReadThroughCache, Depends(get_cache)]

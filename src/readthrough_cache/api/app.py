from typing import Any

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from readthrough_cache.api.dependencies import CacheDep, HandlerDep, lifespan
from readthrough_cache.config import Settings, settings
from readthrough_cache.dto import (
    CacheClearResponse,
    CacheReadResponse,
    CacheStatsResponse,
    HealthCheckResponse,
    ReadCacheRequest,
)
from readthrough_cache.services import ReadThroughCache

API_NAME = "Read-Through Cache API"
API_VERSION = "0.1.0"


def create_app(
    cache: ReadThroughCache | None = None,
    config: Settings | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        cache: Cache to serve. If None, one is built from settings at startup.
        config: Settings for logging and the default cache. Defaults to
            global settings.

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title=API_NAME,
        description="Read-through cache for file contents backed by memory or Redis",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = config or settings
    if cache is not None:
        app.state.cache = cache

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": API_NAME,
            "version": API_VERSION,
            "endpoints": {
                "read": "/cache/read",
                "clear": "/cache",
                "flush": "/cache/flush",
                "stats": "/stats",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        result = await handler.health_check()
        if not result.cache_healthy:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Cache backend unreachable",
            )
        return result

    @app.post("/cache/read", response_model=CacheReadResponse)
    async def read_cache(request: ReadCacheRequest, handler: HandlerDep) -> CacheReadResponse:
        """Read a key through the cache, loading it on a miss."""
        return await handler.read_cache(request)

    @app.delete("/cache", response_model=CacheClearResponse)
    async def clear_cache(handler: HandlerDep) -> CacheClearResponse:
        """Clear all entries of the cache."""
        return await handler.clear_cache()

    @app.post("/cache/flush", response_model=CacheClearResponse)
    async def flush_cache(handler: HandlerDep) -> CacheClearResponse:
        """Flush all entries of the cache."""
        return await handler.flush_cache()

    @app.get("/stats", response_model=CacheStatsResponse)
    async def get_stats(handler: HandlerDep) -> CacheStatsResponse:
        """Get cache statistics."""
        return await handler.get_stats()

    @app.post("/stats/reset", response_model=dict[str, str])
    async def reset_stats(cache: CacheDep) -> dict[str, str]:
        """Reset hit/miss counters."""
        cache.reset_stats()
        return {"message": "Statistics reset"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "readthrough_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )

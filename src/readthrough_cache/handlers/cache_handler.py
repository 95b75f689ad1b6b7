"""HTTP handlers for cache operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes and error responses.
"""

import time

from fastapi import HTTPException, status
from fastapi.concurrency import run_in_threadpool

from readthrough_cache.dto import (
    CacheClearResponse,
    CacheReadResponse,
    CacheStatsResponse,
    HealthCheckResponse,
    ReadCacheRequest,
)
from readthrough_cache.log_config import get_logger
from readthrough_cache.services import ReadThroughCache

log = get_logger("readthrough_cache.handler")


class CacheHandler:
    """HTTP handlers for cache operations.

    This handler delegates to ReadThroughCache and maps errors to
    status codes:
    - FileNotFoundError or IsADirectoryError from the loader -> 404
    - UnicodeDecodeError (source not valid text) -> 415
    - ValueError (key outside the source root) -> 400
    - anything else, including backing-store failures -> 500

    Example:
        ```python
        cache = ReadThroughCache.create()
        handler = CacheHandler(cache=cache)

        @app.post("/cache/read", response_model=CacheReadResponse)
        async def read_cache(request: ReadCacheRequest):
            return await handler.read_cache(request)
        ```
    """

    def __init__(self, cache: ReadThroughCache) -> None:
        """Initialize the cache handler.

        Args:
            cache: The read-through cache (required).
        """
        self._cache = cache

    async def read_cache(self, request: ReadCacheRequest) -> CacheReadResponse:
        """Handle POST /cache/read requests.

        Raises:
            HTTPException: 404, 415, 400 or 500 depending on the failure
        """
        start_time = time.time()
        try:
            result = await run_in_threadpool(self._cache.lookup, request.key)
        except (FileNotFoundError, IsADirectoryError) as e:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Source not found: {request.key}",
            ) from e
        except UnicodeDecodeError as e:
            raise HTTPException(
                status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                detail=f"Source is not valid {e.encoding} text: {request.key}",
            ) from e
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            ) from e
        except Exception as e:
            log.error("handler.read_failed", key=request.key, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to read from cache: {e}",
            ) from e

        return CacheReadResponse(
            key=result.key,
            value=result.value,
            hit=result.hit,
            lookup_time_ms=(time.time() - start_time) * 1000,
        )

    async def clear_cache(self) -> CacheClearResponse:
        """Handle DELETE /cache requests."""
        try:
            success = await run_in_threadpool(self._cache.clear)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to clear cache: {e}",
            ) from e

        return CacheClearResponse(success=success, message="Cache cleared successfully")

    async def flush_cache(self) -> CacheClearResponse:
        """Handle POST /cache/flush requests."""
        try:
            success = await run_in_threadpool(self._cache.flush_all)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to flush cache: {e}",
            ) from e

        return CacheClearResponse(success=success, message="Cache flushed successfully")

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /stats requests."""
        try:
            stats = await run_in_threadpool(self._cache.get_stats)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get stats: {e}",
            ) from e

        return CacheStatsResponse(
            backend=stats.get("backend", ""),
            key_prefix=stats.get("key_prefix", ""),
            total_entries=stats.get("total_entries", 0),
            hits=stats.get("hits", 0),
            misses=stats.get("misses", 0),
            loads=stats.get("loads", 0),
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        is_healthy = await run_in_threadpool(self._cache.is_healthy)

        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            cache_healthy=is_healthy,
        )

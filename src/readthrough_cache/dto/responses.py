"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class CacheReadResponse(BaseModel):
    """Response DTO for a cache read."""

    key: str = Field(..., description="The requested key")
    value: str = Field(..., description="The cached or freshly loaded value")
    hit: bool = Field(..., description="Whether the value was served without loading")
    lookup_time_ms: float = Field(..., description="Time taken for the read in milliseconds")


class CacheClearResponse(BaseModel):
    """Response DTO for clear and flush operations."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable status message")


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    backend: str = Field(..., description="Backing store: 'memory' or 'redis'")
    key_prefix: str = Field(..., description="Literal prepended to every stored key")
    total_entries: int = Field(..., description="Number of cached entries", ge=0)
    hits: int = Field(..., description="Reads served from the store", ge=0)
    misses: int = Field(..., description="Reads that ran the loader", ge=0)
    loads: int = Field(..., description="Loader invocations, failed ones included", ge=0)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the backing store is reachable")

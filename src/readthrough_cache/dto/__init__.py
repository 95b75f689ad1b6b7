"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
Internal logic should use entities from the entities package.
"""

from .requests import ReadCacheRequest
from .responses import (
    CacheClearResponse,
    CacheReadResponse,
    CacheStatsResponse,
    HealthCheckResponse,
)

__all__ = [
    "ReadCacheRequest",
    "CacheReadResponse",
    "CacheClearResponse",
    "CacheStatsResponse",
    "HealthCheckResponse",
]

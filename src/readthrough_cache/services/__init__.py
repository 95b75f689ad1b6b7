"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from readthrough_cache.services import ReadThroughCache

    # Using factory method (recommended)
    cache = ReadThroughCache.create()
    cache = ReadThroughCache.create(backend="redis")

    # Or manual creation
    cache = ReadThroughCache(repository=repo, loader=loader)
    ```
"""

from .cache_service import ReadThroughCache

__all__ = [
    "ReadThroughCache",
]

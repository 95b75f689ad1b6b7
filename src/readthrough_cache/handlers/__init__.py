"""HTTP handlers layer.

Handlers convert between DTOs (API contracts) and service calls.
"""

from .cache_handler import CacheHandler

__all__ = ["CacheHandler"]

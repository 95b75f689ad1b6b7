"""Domain entities for internal representation.

These are pure frozen dataclasses used internally by services and
handlers. They are NOT used for API contracts - use DTOs from the dto
package for that.
"""

from .cache_entry import CacheEntryEntity
from .cache_read import CacheReadEntity

__all__ = ["CacheEntryEntity", "CacheReadEntity"]

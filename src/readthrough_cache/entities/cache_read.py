"""Cache read result domain entity."""

from dataclasses import dataclass

from .cache_entry import CacheEntryEntity


@dataclass(frozen=True)
class CacheReadEntity:
    """Outcome of a single read through the cache.

    Attributes:
        key: The requested key
        value: The value returned to the caller
        hit: True if served from the store, False if the loader ran
    """

    key: str
    value: str
    hit: bool

    @property
    def entry(self) -> CacheEntryEntity:
        """The entry this read returned."""
        return CacheEntryEntity(key=self.key, value=self.value)

"""Cache entry domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheEntryEntity:
    """A cached key and the value its loader produced.

    Attributes:
        key: The cache key, typically a file path
        value: The loaded content, typically text
    """

    key: str
    value: str

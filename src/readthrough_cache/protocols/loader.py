"""Loader protocol.

A loader produces the value for a key on a cache miss. Anything callable
with a single key works: a plain function, a lambda, or an object with
``__call__`` such as ``FileContentLoader``.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Loader(Protocol):
    """Protocol for value loaders used on cache misses."""

    def __call__(self, key: str) -> str:
        """Load the value for ``key``.

        Errors raised here (for example ``FileNotFoundError``) propagate to
        the caller of ``ReadThroughCache.read`` unchanged.
        """
        ...

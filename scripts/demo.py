#!/usr/bin/env python3
"""
Demo script for the read-through cache.

Writes a couple of files to a temporary directory and reads them through
the cache, showing when the loader runs and when the store answers.

Usage:
    python scripts/demo.py                 # in-process store
    CACHE_BACKEND=redis python scripts/demo.py
"""

import tempfile
import time
from pathlib import Path

from readthrough_cache import (
    FileContentLoader,
    ReadThroughCache,
    configure_logging,
    create_repository,
    settings,
)


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


class TracingLoader(FileContentLoader):
    """FileContentLoader that counts disk reads."""

    def __init__(self, root: Path) -> None:
        super().__init__(root=root)
        self.reads = 0

    def __call__(self, key: str) -> str:
        self.reads += 1
        return super().__call__(key)


def timed_read(cache: ReadThroughCache, key: str) -> None:
    """Read a key and print the outcome."""
    start = time.time()
    result = cache.lookup(key)
    duration = (time.time() - start) * 1000
    label = "HIT " if result.hit else "MISS"
    print(f"  {label} {key!r:12} -> {result.value!r} ({duration:.3f}ms)")


def demo_read_through(root: Path) -> None:
    """Demonstrate load, hit, clear, reload."""
    print_section(f"Read-through ({settings.backend.value} backend)")

    loader = TracingLoader(root)
    cache = ReadThroughCache(
        repository=create_repository(backend=settings.backend, key_prefix="demo:"),
        loader=loader,
    )
    cache.clear()

    print("\n📖 Reading a.txt twice:")
    timed_read(cache, "a.txt")
    timed_read(cache, "a.txt")
    print(f"  Disk reads so far: {loader.reads}")

    print("\n📖 Reading b.txt:")
    timed_read(cache, "b.txt")

    print("\n🧹 Clearing the cache...")
    print(f"  clear() -> {cache.clear()}")

    print("\n📖 Reading a.txt again:")
    timed_read(cache, "a.txt")
    print(f"  Disk reads so far: {loader.reads}")

    print("\n📖 Reading a missing file:")
    try:
        cache.read("missing.txt")
    except FileNotFoundError as e:
        print(f"  ✗ {type(e).__name__}: {e}")

    print("\n📊 Stats:")
    for key, value in cache.get_stats().items():
        print(f"  {key}: {value}")

    cache.flush_all()


def main() -> None:
    """Run the demo."""
    configure_logging(level=settings.log_level, log_format=settings.log_format)

    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        (root / "a.txt").write_text("hello", encoding="utf-8")
        (root / "b.txt").write_text("world", encoding="utf-8")
        demo_read_through(root)


if __name__ == "__main__":
    main()

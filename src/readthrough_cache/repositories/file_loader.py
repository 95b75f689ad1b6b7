"""Filesystem loader.

Reads text files relative to a root directory. This is the loader behind
the "cache file contents" use case: keys are relative paths and values are
the file text.
"""

from pathlib import Path

from readthrough_cache.config import settings


class FileContentLoader:
    """Loads file contents from disk.

    This class satisfies the Loader protocol through structural typing.

    Example:
        ```python
        loader = FileContentLoader(root="templates")
        loader("index.html")  # reads templates/index.html
        ```
    """

    def __init__(self, root: str | Path | None = None, encoding: str | None = None) -> None:
        """Initialize the loader.

        Args:
            root: Directory keys are resolved against. Defaults to settings.
            encoding: Text encoding. Defaults to settings.
        """
        self._root = Path(root or settings.source_root).resolve()
        self._encoding = encoding or settings.source_encoding

    @classmethod
    def create(
        cls,
        root: str | Path | None = None,
        encoding: str | None = None,
    ) -> "FileContentLoader":
        """Factory method to create FileContentLoader with defaults."""
        return cls(root=root, encoding=encoding)

    def resolve(self, key: str) -> Path:
        """Resolve ``key`` to a path inside the root.

        Raises:
            ValueError: If the key points outside the root directory
        """
        path = (self._root / key).resolve()
        if path != self._root and self._root not in path.parents:
            raise ValueError(f"Key {key!r} resolves outside of {self._root}")
        return path

    def __call__(self, key: str) -> str:
        """Read the file named by ``key``.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the key points outside the root directory
        """
        return self.resolve(key).read_text(encoding=self._encoding)

    @property
    def root(self) -> Path:
        """Get the root directory."""
        return self._root

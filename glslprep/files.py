"""File providers: read shader text from disk, with optional caching.

None of the providers are safe for concurrent use; callers sharing one
instance across threads must lock around it.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from loguru import logger


class FileProvider(Protocol):
    """Interface for reading a file into a string."""

    def get_string(self, filepath: Path) -> str | None:
        """Read the file at ``filepath``.

        Args:
            filepath: Path of the file

        Returns:
            File contents, or None if the file could not be opened or read
        """
        ...


def read_string(filepath: Path) -> str | None:
    """Read a file as UTF-8 without newline translation.

    Args:
        filepath: Path of the file

    Returns:
        File contents, or None on any I/O or decoding failure
    """
    try:
        data = Path(filepath).read_bytes()
    except OSError as e:
        logger.debug(f"Could not read {filepath}: {e}")
        return None

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.debug(f"Could not decode {filepath}: {e}")
        return None


class UncachedFileProvider:
    """Read every file from disk on each request."""

    def get_string(self, filepath: Path) -> str | None:
        return read_string(filepath)


class CachedFileProvider:
    """Cache files forever after the first successful read.

    Fine for shaders that never change while the process runs. When files are
    reloaded at runtime use :class:`SmartCachedFileProvider` instead, since
    this cache never sees updates.
    """

    def __init__(self) -> None:
        self._cache: dict[str, str] = {}

    def get_string(self, filepath: Path) -> str | None:
        key = str(filepath)
        if key in self._cache:
            logger.debug(f"Cache hit: {key}")
            return self._cache[key]

        source = read_string(filepath)
        if source is None:
            return None

        self._cache[key] = source
        return source

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)


@dataclass(frozen=True)
class CacheKey:
    """Identity of a file's contents: path, modification time and size."""

    filepath: str
    last_write: int
    file_size: int

    @classmethod
    def from_path(cls, filepath: Path) -> "CacheKey":
        """Probe a file's metadata.

        Raises:
            OSError: If the file cannot be stat'ed
        """
        stat = Path(filepath).stat()
        return cls(str(filepath), stat.st_mtime_ns, stat.st_size)


class SmartCachedFileProvider:
    """Cache files, refetching any file whose mtime or size has changed.

    Old entries are not evicted, a modified file just stops hitting them.
    """

    def __init__(self) -> None:
        self._cache: dict[CacheKey, str] = {}

    def get_string(self, filepath: Path) -> str | None:
        try:
            key = CacheKey.from_path(filepath)
        except OSError as e:
            logger.debug(f"Could not stat {filepath}: {e}")
            return None

        if key in self._cache:
            logger.debug(f"Cache hit: {key.filepath}")
            return self._cache[key]

        source = read_string(filepath)
        if source is None:
            return None

        self._cache[key] = source
        return source

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

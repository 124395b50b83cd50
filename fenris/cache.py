"""In-memory LRU cache of file contents in front of the file system."""

from __future__ import annotations

import threading
from collections import OrderedDict

from fenris.file_operations import FileOperationError
from fenris.file_operations import read_file as _read_from_disk
from fenris.file_operations import write_file as _write_to_disk
from fenris.logsetup import get_logger

__all__ = ["CacheManager"]

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


class CacheManager:
    """Caches file contents, evicting the least recently used file when full."""

    def __init__(self, max_cache_size: int = 100, logger_name: str = "CacheManager") -> None:
        self._max_cache_size = max_cache_size
        self._entries: OrderedDict[str, str] = OrderedDict()
        self._lock = threading.Lock()
        self._logger = get_logger(logger_name)

    def read_file(self, filename: str) -> str:
        """Return a file's content from the cache or disk; "" if it cannot be read."""
        with self._lock:
            if filename in self._entries:
                self._entries.move_to_end(filename)
                self._logger.debug("cache hit: %s", filename)
                return self._entries[filename]

            self._logger.debug("cache miss: %s", filename)
            try:
                raw = _read_from_disk(filename)
            except FileOperationError as exc:
                self._logger.warning("failed to read %s: %s", filename, exc)
                return ""

            content = raw.decode(_ENCODING, _ERRORS)
            self._store(filename, content)
            return content

    def write_file(self, filename: str, content: str) -> None:
        """Write ``content`` to disk and cache it.

        Raises FileOperationError if the file cannot be written.
        """
        with self._lock:
            _write_to_disk(filename, content.encode(_ENCODING, _ERRORS))
            self._store(filename, content)
            self._logger.debug("wrote and cached: %s", filename)

    def invalidate(self, filename: str) -> None:
        """Drop one file from the cache."""
        with self._lock:
            if self._entries.pop(filename, None) is not None:
                self._logger.debug("invalidated: %s", filename)

    def clear_cache(self) -> None:
        """Drop every cached file."""
        with self._lock:
            self._entries.clear()
            self._logger.debug("cache cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _store(self, filename: str, content: str) -> None:
        if self._max_cache_size <= 0:
            return
        if filename in self._entries:
            self._entries.move_to_end(filename)
        else:
            while len(self._entries) >= self._max_cache_size:
                evicted, _ = self._entries.popitem(last=False)
                self._logger.debug("evicted: %s", evicted)
        self._entries[filename] = content
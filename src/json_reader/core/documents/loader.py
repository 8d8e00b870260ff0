"""Load JSON documents from disk with an mtime-validated cache."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from json_reader.core.config.settings import ReaderSettings
from json_reader.core.errors import DocumentLoadError

logger = logging.getLogger(__name__)


def resolve_path(file_path: str, base_dir: Path | None = None) -> str:
    """Absolute paths are kept; relative ones resolve against ``base_dir``.

    ``base_dir`` defaults to the current working directory.
    """
    path = Path(file_path).expanduser()
    if path.is_absolute():
        return str(path.resolve())
    return str(((base_dir or Path.cwd()) / path).resolve())


@dataclass(frozen=True)
class CachedDocument:
    """Parsed document plus the modification time it was read at."""

    mtime_ns: int
    data: Any


class DocumentCache:
    """Read-through cache of parsed JSON documents keyed by resolved path.

    A cached document is served while the file's ``st_mtime_ns`` is
    unchanged, so repeated reads return the same object. Concurrent misses
    may both read the file; the last one stored wins.
    """

    def __init__(self, settings: ReaderSettings | None = None) -> None:
        self.settings = settings or ReaderSettings()
        self._entries: dict[str, CachedDocument] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def resolve(self, file_path: str) -> str:
        return resolve_path(file_path, self.settings.resolve_base_dir())

    def load(self, file_path: str) -> Any:
        """Return the parsed document at ``file_path``.

        Raises:
            DocumentLoadError: If the file is missing, unreadable, larger than
                ``max_file_bytes``, or not valid JSON.
        """
        resolved = self.resolve(file_path)
        try:
            stat = Path(resolved).stat()
        except OSError as e:
            raise DocumentLoadError(resolved, str(e)) from e

        if self.settings.cache_enabled:
            with self._lock:
                cached = self._entries.get(resolved)
            if cached is not None and cached.mtime_ns == stat.st_mtime_ns:
                logger.debug("Document cache hit for %s", resolved)
                return cached.data

        if stat.st_size > self.settings.max_file_bytes:
            raise DocumentLoadError(
                resolved,
                f"file is {stat.st_size} bytes, "
                f"limit is {self.settings.max_file_bytes}",
            )

        logger.debug("Reading document %s", resolved)
        data = self._read(resolved)

        if self.settings.cache_enabled:
            with self._lock:
                self._entries[resolved] = CachedDocument(stat.st_mtime_ns, data)
        return data

    def invalidate(self, file_path: str | None = None) -> None:
        """Drop one cached document, or all of them."""
        with self._lock:
            if file_path is None:
                self._entries.clear()
            else:
                self._entries.pop(self.resolve(file_path), None)

    @staticmethod
    def _read(resolved: str) -> Any:
        try:
            content = Path(resolved).read_text(encoding="utf-8")
            return json.loads(content)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DocumentLoadError(resolved, str(e)) from e


def read_json_file(file_path: str, settings: ReaderSettings | None = None) -> Any:
    """Read and parse a JSON file without caching."""
    return DocumentCache(
        (settings or ReaderSettings()).model_copy(update={"cache_enabled": False})
    ).load(file_path)

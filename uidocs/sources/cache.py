"""In-memory TTL cache and a caching provider wrapper."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TypeVar

from ..logging import get_logger
from .base import SourceProvider

_LOGGER = get_logger("sources.cache")

T = TypeVar("T")

_MISSING = object()


@dataclass
class _Entry:
    value: Any
    stored_at: float
    ttl: float

    def expired(self, now: float) -> bool:
        return self.ttl > 0 and now - self.stored_at > self.ttl


class TTLCache:
    """Thread-safe key/value cache whose entries expire after ``ttl`` seconds.

    A TTL of ``0`` keeps the entry until it is deleted explicitly.
    """

    def __init__(self, default_ttl: float = 3600.0, *, clock: Callable[[], float] = time.monotonic) -> None:
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Optional[T] = None) -> Any:
        with self._lock:
            value = self._lookup(key)
        return default if value is _MISSING else value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        entry = _Entry(value=value, stored_at=self._clock(), ttl=self.default_ttl if ttl is None else ttl)
        with self._lock:
            self._entries[key] = entry

    def get_or_fetch(self, key: str, fetch: Callable[[], T], ttl: Optional[float] = None) -> T:
        """Return the cached value or call ``fetch`` and store its result.

        Errors raised by ``fetch`` propagate and nothing is stored.
        """
        with self._lock:
            value = self._lookup(key)
        if value is not _MISSING:
            return value
        _LOGGER.debug("Cache miss for %s", key)
        value = fetch()
        self.set(key, value, ttl)
        return value

    def has(self, key: str) -> bool:
        with self._lock:
            return self._lookup(key) is not _MISSING

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def delete_by_prefix(self, prefix: str) -> int:
        with self._lock:
            doomed = [key for key in self._entries if key.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def clear_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.expired(now)]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _lookup(self, key: str) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return _MISSING
        if entry.expired(self._clock()):
            del self._entries[key]
            return _MISSING
        return entry.value


class CachedSourceProvider:
    """Wraps a provider so repeated reads are served from a :class:`TTLCache`."""

    def __init__(
        self,
        inner: SourceProvider,
        cache: TTLCache,
        *,
        file_ttl: Optional[float] = None,
        directory_ttl: Optional[float] = None,
    ) -> None:
        self.inner = inner
        self.cache = cache
        self.file_ttl = file_ttl
        self.directory_ttl = directory_ttl

    def fetch_text(self, path: str) -> str:
        return self.cache.get_or_fetch(f"file:{path}", lambda: self.inner.fetch_text(path), self.file_ttl)

    def list_directory(self, path: str) -> List[str]:
        names = self.cache.get_or_fetch(
            f"dir:{path}", lambda: self.inner.list_directory(path), self.directory_ttl
        )
        return list(names)

    def invalidate(self, prefix: str = "") -> int:
        """Drop cached files and listings whose path starts with ``prefix``."""
        return self.cache.delete_by_prefix(f"file:{prefix}") + self.cache.delete_by_prefix(f"dir:{prefix}")


__all__ = ["CachedSourceProvider", "TTLCache"]

"""
In-Memory Data Cache

Time-to-live key/value store used to avoid re-reading settings and the
category listing on every request.

Expiry is lazy: a stale entry is only evicted when it is read (or on
delete/clear). There is no size bound and no locking; the application runs
one process with cooperative request handling and the cached data is a few
dozen rows.

Author: Khalil Bannouri
Version: 1.0.0
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

DEFAULT_TTL_SECONDS = 300.0


@dataclass
class CacheEntry:
    value: Any
    stored_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.stored_at > self.ttl


class DataCache:
    """
    Mapping of string keys to values that expire ttl seconds after insertion.

    Args:
        clock: Monotonic time source in seconds (injectable for tests)
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def set(self, key: str, value: Any, ttl: float = DEFAULT_TTL_SECONDS) -> None:
        self._entries[key] = CacheEntry(value=value, stored_at=self._clock(), ttl=ttl)

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._entries[key]
            return None
        return entry.value

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        # Counts stale entries that have not been read yet
        return len(self._entries)

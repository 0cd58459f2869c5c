"""
Time-to-live key/value cache used by the request guards.

Each guard owns its own instance and writers invalidate through an explicit
call. Entries are immutable and replaced wholesale; plain dict get/set is the
only synchronisation.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Hashable, Optional, TypeVar

V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    value: V
    fetched_at: float


class TTLCache(Generic[V]):
    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[Hashable, CacheEntry[V]] = {}

    def get(self, key: Hashable) -> Optional[CacheEntry[V]]:
        """Return the live entry for key, or None on miss or expiry.

        A hit may carry a None value (a cached negative lookup).
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.fetched_at >= self.ttl_seconds:
            self._entries.pop(key, None)
            return None
        return entry

    def set(self, key: Hashable, value: V) -> CacheEntry[V]:
        entry = CacheEntry(value=value, fetched_at=self._clock())
        self._entries[key] = entry
        return entry

    def invalidate(self, key: Hashable) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Any) -> bool:
        return self.get(key) is not None

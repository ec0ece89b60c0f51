"""In-process TTL cache for analytics responses (default backend)."""

import time
from collections.abc import Callable
from typing import Any


class MemoryAnalyticsCache:
    """Dict-backed cache; entries expire ttl_seconds after they are stored.

    Expired entries are dropped lazily on read and when size() is taken.
    Lives on app.state for the life of the process.
    """

    def __init__(
        self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    @property
    def backend_name(self) -> str:
        return "memory"

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    async def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set(self, key: str, value: Any) -> None:
        self._entries[key] = (self._clock() + self._ttl, value)

    def _purge(self) -> None:
        now = self._clock()
        for key in [k for k, (exp, _) in self._entries.items() if now >= exp]:
            del self._entries[key]

    async def size(self) -> int:
        self._purge()
        return len(self._entries)

    async def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

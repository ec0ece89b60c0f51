"""Outbound rate limiter: bounded concurrency, minimum spacing, per-call timeout."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

T = TypeVar("T")


class OutboundRateLimiter:
    """Limit concurrent outbound calls and space their starts.

    At most max_concurrency calls run at once and consecutive call starts are
    at least min_interval_ms apart. Each call is cancelled after
    timeout_seconds and raises TimeoutError.
    """

    def __init__(
        self,
        max_concurrency: int = 5,
        min_interval_ms: int = 200,
        timeout_seconds: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.max_concurrency = max_concurrency
        self.min_interval = min_interval_ms / 1000
        self.timeout_seconds = timeout_seconds
        self._clock = clock
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._pace_lock = asyncio.Lock()
        self._last_start: float | None = None

    async def _wait_turn(self) -> None:
        async with self._pace_lock:
            if self._last_start is not None:
                wait = self._last_start + self.min_interval - self._clock()
                if wait > 0:
                    await asyncio.sleep(wait)
            self._last_start = self._clock()

    async def run(self, call: Callable[[], Awaitable[T]]) -> T:
        async with self._semaphore:
            await self._wait_turn()
            async with asyncio.timeout(self.timeout_seconds):
                return await call()

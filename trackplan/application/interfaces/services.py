"""Service interfaces (ports) for the application layer.

Protocols for outbound collaborators: analytics API, analytics cache,
outbound rate limiter, password hashing and token issuing (DIP).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


class IAnalyticsClient(Protocol):
    """Protocol for the analytics (Matomo) HTTP API."""

    async def get_event_rows(
        self, site_id: int, label: str, start_date: str, end_date: str
    ) -> list[dict[str, Any]]:
        """Return Events.getCategory rows for label in the date range."""

    async def get_daily_count(self, site_id: int, label: str, day: str) -> int:
        """Return total event count (nb_events) for label on one day."""


class IAnalyticsCache(Protocol):
    """Protocol for the TTL cache in front of the analytics API."""

    async def get(self, key: str) -> Any | None:
        """Return cached value or None."""

    async def set(self, key: str, value: Any) -> None:
        """Store value for the configured TTL."""

    async def clear(self) -> int:
        """Drop all analytics entries; return number removed."""

    async def size(self) -> int:
        """Return number of live entries."""

    @property
    def backend_name(self) -> str:
        """Short backend name (memory, redis)."""

    @property
    def ttl_seconds(self) -> int:
        """Entry lifetime in seconds."""


class IRateLimiter(Protocol):
    """Protocol for bounding concurrent outbound calls."""

    async def run(self, call: Callable[[], Awaitable[T]]) -> T:
        """Run call under the concurrency/pacing limit with a timeout."""


class IPasswordHasher(Protocol):
    def hash(self, password: str) -> str:
        """Return a password hash."""

    def verify(self, password: str, hashed: str) -> bool:
        """Return True if password matches hashed."""


class ITokenIssuer(Protocol):
    def issue(self, user_id: str, role: str) -> str:
        """Return a signed access token for the user."""

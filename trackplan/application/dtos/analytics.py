"""DTOs for the analytics proxy (no dependency on HTTP client)."""

from dataclasses import dataclass, field
from typing import Any

from trackplan.domain.enums import Platform


@dataclass(frozen=True)
class EventCountsResult:
    """Matomo rows for one event label on one platform and date range."""

    label: str
    platform: Platform
    site_id: int
    start_date: str
    end_date: str
    rows: list[dict[str, Any]] = field(default_factory=list)
    cached: bool = False


@dataclass(frozen=True)
class CacheStats:
    backend: str
    size: int
    ttl_seconds: int

"""Analytics proxy API schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from trackplan.domain.enums import Platform


class EventCountsResponse(BaseModel):
    """Matomo Events.getCategory rows for one event on one platform."""

    model_config = ConfigDict(from_attributes=True)

    label: str
    platform: Platform
    site_id: int
    start_date: str
    end_date: str
    rows: list[dict[str, Any]]
    cached: bool


class CacheStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    backend: str
    size: int
    ttl_seconds: int


class CacheClearResponse(BaseModel):
    cleared: int

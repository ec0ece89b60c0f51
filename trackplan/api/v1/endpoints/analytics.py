"""Analytics proxy API: event counts from Matomo and cache administration."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from trackplan.api.v1.dependencies import (
    CanView,
    IsAdmin,
    get_analytics_service,
)
from trackplan.application.use_cases.analytics import AnalyticsService
from trackplan.schemas.analytics import (
    CacheClearResponse,
    CacheStatsResponse,
    EventCountsResponse,
)

router = APIRouter()

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


@router.get("/events", response_model=EventCountsResponse)
async def get_event_counts(
    _: CanView,
    analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
    category: Annotated[str, Query(min_length=1)],
    action: Annotated[str, Query(min_length=1)],
    platform: Annotated[str, Query(min_length=1)],
    start_date: Annotated[str | None, Query(pattern=DATE_PATTERN)] = None,
    end_date: Annotated[str | None, Query(pattern=DATE_PATTERN)] = None,
):
    """Daily event counts for one event on one platform (default: last 31 days)."""
    result = await analytics_service.get_event_counts(
        category, action, platform, start_date, end_date
    )
    return EventCountsResponse.model_validate(result)


@router.get("/cache", response_model=CacheStatsResponse)
async def get_cache_stats(
    _: IsAdmin,
    analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
):
    return CacheStatsResponse.model_validate(await analytics_service.cache_stats())


@router.delete("/cache", response_model=CacheClearResponse)
async def clear_cache(
    _: IsAdmin,
    analytics_service: Annotated[AnalyticsService, Depends(get_analytics_service)],
):
    return CacheClearResponse(cleared=await analytics_service.clear_cache())

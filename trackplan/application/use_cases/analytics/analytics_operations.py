"""Analytics proxy: event counts from Matomo behind a TTL cache."""

from __future__ import annotations

import logging
from datetime import date

from trackplan.application.dtos.analytics import CacheStats, EventCountsResult
from trackplan.application.interfaces.services import IAnalyticsCache, IAnalyticsClient
from trackplan.core.constants import (
    ANALYTICS_DEFAULT_LOOKBACK_DAYS,
    CACHE_KEY_SEP,
    MATOMO_LABEL_FORMAT,
)
from trackplan.domain.enums import Platform
from trackplan.domain.exceptions import (
    AnalyticsNotConfiguredException,
    ValidationException,
)
from trackplan.shared.utils.datetime import days_ago, format_day

logger = logging.getLogger(__name__)


def event_label(category: str, action: str) -> str:
    """Matomo event label for a tracked event."""
    return MATOMO_LABEL_FORMAT.format(category=category, action=action)


def analytics_cache_key(label: str, platform: Platform, start: str, end: str) -> str:
    return CACHE_KEY_SEP.join((label, platform.value, start, end))


def _parse_day(value: str, field: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValidationException(
            f"Invalid date '{value}' (expected YYYY-MM-DD)", field=field
        ) from e


def resolve_date_range(
    start_date: str | None, end_date: str | None, today: date | None = None
) -> tuple[str, str]:
    """Return (start, end) as YYYY-MM-DD; defaults to 31 days ago through yesterday."""
    start = (
        _parse_day(start_date, "start_date")
        if start_date
        else days_ago(ANALYTICS_DEFAULT_LOOKBACK_DAYS, today)
    )
    end = _parse_day(end_date, "end_date") if end_date else days_ago(1, today)
    if start > end:
        raise ValidationException("start_date must not be after end_date", field="start_date")
    return format_day(start), format_day(end)


class AnalyticsService:
    """Read event counts from the analytics backend with caching."""

    def __init__(
        self,
        client: IAnalyticsClient | None,
        cache: IAnalyticsCache,
        site_ids: dict[Platform, int],
    ) -> None:
        self.client = client
        self.cache = cache
        self.site_ids = site_ids

    def _site_id(self, platform: str | Platform) -> tuple[Platform, int]:
        try:
            resolved = Platform(platform)
        except ValueError as e:
            raise ValidationException(
                f"Unknown platform: {platform}", field="platform"
            ) from e
        site_id = self.site_ids.get(resolved)
        if site_id is None:
            raise ValidationException(
                f"No analytics site configured for platform: {resolved.value}",
                field="platform",
            )
        return resolved, site_id

    async def get_event_counts(
        self,
        category: str,
        action: str,
        platform: str | Platform,
        start_date: str | None = None,
        end_date: str | None = None,
        today: date | None = None,
    ) -> EventCountsResult:
        """Return Matomo rows for the event on one platform.

        Raises:
            ValidationException: unknown platform or bad date range.
            AnalyticsNotConfiguredException: Matomo URL/token missing.
            AnalyticsUnavailableException: Matomo failed or returned an error.
        """
        if self.client is None:
            raise AnalyticsNotConfiguredException()
        resolved, site_id = self._site_id(platform)
        start, end = resolve_date_range(start_date, end_date, today)
        label = event_label(category, action)
        key = analytics_cache_key(label, resolved, start, end)

        rows = await self.cache.get(key)
        if rows is not None:
            return EventCountsResult(
                label=label,
                platform=resolved,
                site_id=site_id,
                start_date=start,
                end_date=end,
                rows=rows,
                cached=True,
            )

        rows = await self.client.get_event_rows(site_id, label, start, end)
        await self.cache.set(key, rows)
        return EventCountsResult(
            label=label,
            platform=resolved,
            site_id=site_id,
            start_date=start,
            end_date=end,
            rows=rows,
        )

    async def cache_stats(self) -> CacheStats:
        return CacheStats(
            backend=self.cache.backend_name,
            size=await self.cache.size(),
            ttl_seconds=self.cache.ttl_seconds,
        )

    async def clear_cache(self) -> int:
        removed = await self.cache.clear()
        logger.info("Analytics cache cleared (%d entries)", removed)
        return removed

"""Drop detection: compare yesterday's event counts with the day before.

For every event implemented on a platform that has an analytics site, the
job fetches both daily counts through the outbound rate limiter and stores
an alert when the relative drop reaches the configured threshold. One
failing (event, platform) pair is logged and counted; it never aborts the
run.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from trackplan.application.dtos.alert import (
    AlertCheckSummary,
    AlertToCreate,
    EffectiveAlertSettings,
)
from trackplan.application.interfaces.repositories import (
    IAlertRepository,
    IEventRepository,
)
from trackplan.application.interfaces.services import IAnalyticsClient, IRateLimiter
from trackplan.application.use_cases.alerts.alert_operations import AlertService
from trackplan.application.use_cases.analytics.analytics_operations import event_label
from trackplan.domain.enums import Platform
from trackplan.shared.utils.datetime import days_ago, format_day

logger = logging.getLogger(__name__)

ClientFactory = Callable[[EffectiveAlertSettings], IAnalyticsClient]
LimiterFactory = Callable[[int], IRateLimiter]


def compute_drop_percent(yesterday: int, day_before: int) -> int | None:
    """Percent drop from day_before to yesterday, rounded half up; None if day_before is 0."""
    if day_before <= 0:
        return None
    ratio = Decimal(yesterday) / Decimal(day_before)
    return int(((1 - ratio) * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class _Watch:
    event_id: str
    category: str
    action: str
    platform: Platform
    site_id: int


class DropDetectionService:
    def __init__(
        self,
        event_repo: IEventRepository,
        alert_repo: IAlertRepository,
        alert_service: AlertService,
        client_factory: ClientFactory,
        limiter_factory: LimiterFactory,
    ) -> None:
        self.event_repo = event_repo
        self.alert_repo = alert_repo
        self.alert_service = alert_service
        self.client_factory = client_factory
        self.limiter_factory = limiter_factory

    async def _watches(self, site_ids: dict[Platform, int]) -> list[_Watch]:
        events = await self.event_repo.get_events_for_monitoring()
        return [
            _Watch(e.event_id, e.category, e.action, platform, site_ids[platform])
            for e in events
            for platform in e.platforms
            if platform in site_ids
        ]

    async def check_drops(self, today: date | None = None) -> AlertCheckSummary:
        """Run one drop check and persist the alerts it finds."""
        settings = await self.alert_service.get_effective_settings()
        if not settings.is_enabled:
            logger.info("Drop check skipped: alerts disabled")
            return AlertCheckSummary(skipped_reason="disabled")
        if not settings.analytics_configured:
            logger.info("Drop check skipped: analytics not configured")
            return AlertCheckSummary(skipped_reason="analytics_not_configured")

        watches = await self._watches(settings.site_ids)
        client = self.client_factory(settings)
        limiter = self.limiter_factory(settings.max_concurrency)
        yesterday = format_day(days_ago(1, today))
        day_before = format_day(days_ago(2, today))

        async def check(watch: _Watch) -> AlertToCreate | None:
            label = event_label(watch.category, watch.action)
            y = await limiter.run(
                lambda: client.get_daily_count(watch.site_id, label, yesterday)
            )
            d = await limiter.run(
                lambda: client.get_daily_count(watch.site_id, label, day_before)
            )
            drop = compute_drop_percent(y, d)
            if drop is None or drop < settings.drop_threshold:
                return None
            return AlertToCreate(
                event_id=watch.event_id,
                platform=watch.platform,
                event_category=watch.category,
                event_action=watch.action,
                yesterday_count=y,
                day_before_count=d,
                drop_percent=drop,
            )

        outcomes = await asyncio.gather(
            *(check(p) for p in watches), return_exceptions=True
        )
        found: list[AlertToCreate] = []
        errors = 0
        for watch, outcome in zip(watches, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                errors += 1
                logger.warning(
                    "Drop check failed for %s > @%s on %s: %s",
                    watch.category,
                    watch.action,
                    watch.platform.value,
                    outcome,
                )
            elif outcome is not None:
                found.append(outcome)

        created = await self.alert_repo.create_alerts(found) if found else []
        logger.info(
            "Drop check finished: %d checked, %d alerts, %d errors",
            len(watches),
            len(created),
            errors,
        )
        return AlertCheckSummary(
            checked=len(watches),
            alerts_created=len(created),
            errors=errors,
            alerts=created,
        )

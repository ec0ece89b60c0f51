"""Composition root: build application services from a session.

Route dependencies and the background alert job both build their services
here, so each request (or job run) wires the same repositories onto one
AsyncSession.
"""

from __future__ import annotations

from collections.abc import Callable

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from trackplan.application.dtos.alert import EffectiveAlertSettings
from trackplan.application.interfaces.services import IAnalyticsCache
from trackplan.application.use_cases.alerts import AlertService, DropDetectionService
from trackplan.application.use_cases.analytics import AnalyticsService
from trackplan.application.use_cases.categories import CategoryService
from trackplan.application.use_cases.comments import CommentService
from trackplan.application.use_cases.events import EventService, PlatformStatusService
from trackplan.application.use_cases.users import UserService
from trackplan.core.config import Settings
from trackplan.infrastructure.external.analytics import (
    MatomoClient,
    OutboundRateLimiter,
)
from trackplan.infrastructure.persistence.repositories import (
    AlertRepository,
    AlertSettingsRepository,
    CategoryRepository,
    CommentRepository,
    EventRepository,
    EventVersionRepository,
    PlatformStatusRepository,
    UserRepository,
    VersionedEventRepository,
)
from trackplan.infrastructure.security import BcryptPasswordHasher, JwtTokenIssuer


def build_event_service(db: AsyncSession, settings: Settings) -> EventService:
    event_repo = EventRepository(db)
    return EventService(
        event_repo=event_repo,
        version_repo=EventVersionRepository(db),
        writer=VersionedEventRepository(db, event_repo=event_repo),
        max_list_limit=settings.event_list_max_limit,
    )


def build_platform_status_service(db: AsyncSession) -> PlatformStatusService:
    event_repo = EventRepository(db)
    status_repo = PlatformStatusRepository(db)
    return PlatformStatusService(
        event_repo=event_repo,
        status_repo=status_repo,
        writer=VersionedEventRepository(db, status_repo=status_repo, event_repo=event_repo),
    )


def build_category_service(db: AsyncSession) -> CategoryService:
    return CategoryService(CategoryRepository(db))


def build_comment_service(db: AsyncSession) -> CommentService:
    return CommentService(CommentRepository(db), EventRepository(db))


def build_user_service(db: AsyncSession, settings: Settings) -> UserService:
    return UserService(
        UserRepository(db), BcryptPasswordHasher(), JwtTokenIssuer(settings)
    )


def build_alert_service(db: AsyncSession, settings: Settings) -> AlertService:
    return AlertService(AlertRepository(db), AlertSettingsRepository(db), settings)


def matomo_client_factory(
    http_client: httpx.AsyncClient, settings: Settings
) -> Callable[[EffectiveAlertSettings], MatomoClient]:
    """Return a factory building a Matomo client for the effective URL/token."""

    def build(effective: EffectiveAlertSettings) -> MatomoClient:
        assert effective.matomo_url and effective.matomo_token
        return MatomoClient(
            http_client,
            effective.matomo_url,
            effective.matomo_token,
            timeout=settings.analytics_request_timeout,
            max_retries=settings.analytics_max_retries,
            initial_backoff=settings.analytics_initial_backoff,
        )

    return build


def rate_limiter_factory(settings: Settings) -> Callable[[int], OutboundRateLimiter]:
    def build(max_concurrency: int) -> OutboundRateLimiter:
        return OutboundRateLimiter(
            max_concurrency=max_concurrency,
            min_interval_ms=settings.alert_min_interval_ms,
            timeout_seconds=settings.analytics_request_timeout,
        )

    return build


def build_drop_detection_service(
    db: AsyncSession, http_client: httpx.AsyncClient, settings: Settings
) -> DropDetectionService:
    return DropDetectionService(
        event_repo=EventRepository(db),
        alert_repo=AlertRepository(db),
        alert_service=build_alert_service(db, settings),
        client_factory=matomo_client_factory(http_client, settings),
        limiter_factory=rate_limiter_factory(settings),
    )


async def build_analytics_service(
    db: AsyncSession,
    http_client: httpx.AsyncClient,
    cache: IAnalyticsCache,
    settings: Settings,
) -> AnalyticsService:
    """Analytics proxy using the effective (stored or environment) Matomo settings."""
    effective = await build_alert_service(db, settings).get_effective_settings()
    client = (
        matomo_client_factory(http_client, settings)(effective)
        if effective.analytics_configured
        else None
    )
    return AnalyticsService(client, cache, effective.site_ids)

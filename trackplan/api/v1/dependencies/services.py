"""Service dependencies: one builder per use case, read or write session."""

from __future__ import annotations

from typing import Annotated

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from trackplan.application.interfaces.services import IAnalyticsCache
from trackplan.application.use_cases.alerts import AlertService, DropDetectionService
from trackplan.application.use_cases.analytics import AnalyticsService
from trackplan.application.use_cases.categories import CategoryService
from trackplan.application.use_cases.comments import CommentService
from trackplan.application.use_cases.events import EventService, PlatformStatusService
from trackplan.application.use_cases.users import UserService
from trackplan.core.config import Settings, get_settings
from trackplan.infrastructure.persistence.database import get_db, get_db_transactional

from . import _composition as compose

ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound HTTP client created in lifespan."""
    return request.app.state.http_client


def get_analytics_cache(request: Request) -> IAnalyticsCache:
    return request.app.state.analytics_cache


async def get_event_query_service(db: ReadSession, settings: AppSettings) -> EventService:
    return compose.build_event_service(db, settings)


async def get_event_service(db: WriteSession, settings: AppSettings) -> EventService:
    return compose.build_event_service(db, settings)


async def get_platform_status_query_service(db: ReadSession) -> PlatformStatusService:
    return compose.build_platform_status_service(db)


async def get_platform_status_service(db: WriteSession) -> PlatformStatusService:
    return compose.build_platform_status_service(db)


async def get_category_query_service(db: ReadSession) -> CategoryService:
    return compose.build_category_service(db)


async def get_category_service(db: WriteSession) -> CategoryService:
    return compose.build_category_service(db)


async def get_comment_query_service(db: ReadSession) -> CommentService:
    return compose.build_comment_service(db)


async def get_comment_service(db: WriteSession) -> CommentService:
    return compose.build_comment_service(db)


async def get_user_query_service(db: ReadSession, settings: AppSettings) -> UserService:
    return compose.build_user_service(db, settings)


async def get_user_service(db: WriteSession, settings: AppSettings) -> UserService:
    return compose.build_user_service(db, settings)


async def get_alert_query_service(db: ReadSession, settings: AppSettings) -> AlertService:
    return compose.build_alert_service(db, settings)


async def get_alert_service(db: WriteSession, settings: AppSettings) -> AlertService:
    return compose.build_alert_service(db, settings)


async def get_drop_detection_service(
    db: WriteSession,
    settings: AppSettings,
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> DropDetectionService:
    return compose.build_drop_detection_service(db, http_client, settings)


async def get_analytics_service(
    db: ReadSession,
    settings: AppSettings,
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    cache: Annotated[IAnalyticsCache, Depends(get_analytics_cache)],
) -> AnalyticsService:
    return await compose.build_analytics_service(db, http_client, cache, settings)

"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: shared HTTP client, analytics
cache, telemetry, alert scheduler, DB engine dispose. No business logic.
"""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from trackplan.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: HTTP client, analytics cache (Redis if enabled, else
    memory), telemetry (if enabled), alert scheduler (if an interval is set).
    Shutdown runs in reverse.
    """
    settings = get_settings()

    # ---- Startup ----
    # Shared HTTP client for analytics calls (connection reuse).
    app.state.http_client = httpx.AsyncClient(timeout=settings.analytics_request_timeout)

    if settings.redis_enabled:
        from trackplan.infrastructure.cache import CacheService, RedisAnalyticsCache

        cache_service = CacheService(settings=settings)
        await cache_service.connect()
        app.state.cache_service = cache_service
        app.state.analytics_cache = RedisAnalyticsCache(
            cache_service, settings.analytics_cache_ttl
        )
    else:
        from trackplan.infrastructure.cache import MemoryAnalyticsCache

        app.state.cache_service = None
        app.state.analytics_cache = MemoryAnalyticsCache(settings.analytics_cache_ttl)
    logger.info("Analytics cache: %s", app.state.analytics_cache.backend_name)

    if settings.telemetry_enabled:
        from trackplan.infrastructure.persistence import database
        from trackplan.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        database.get_session_factory()
        telemetry.instrument_sqlalchemy(database.engine)
        if settings.redis_enabled:
            telemetry.instrument_redis()
        telemetry.instrument_logging()
        logger.info("Telemetry initialized")

    app.state.alert_task = None
    if settings.alert_check_interval_seconds > 0:
        from trackplan.jobs.alert_job import run_alert_scheduler

        app.state.alert_task = asyncio.create_task(
            run_alert_scheduler(app.state.http_client, settings)
        )

    yield

    # ---- Shutdown ----
    alert_task = app.state.alert_task
    if alert_task is not None:
        alert_task.cancel()
        with suppress(asyncio.CancelledError):
            await alert_task
        logger.info("Alert scheduler stopped")

    await app.state.http_client.aclose()
    logger.info("HTTP client closed")

    if app.state.cache_service is not None:
        await app.state.cache_service.disconnect()

    from trackplan.shared.telemetry.telemetry import get_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        logger.info("Telemetry shutdown complete")

    from trackplan.infrastructure.persistence.database import dispose_engine

    await dispose_engine()

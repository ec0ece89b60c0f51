"""Scheduled drop check.

Started from lifespan when ALERT_CHECK_INTERVAL_SECONDS > 0 and cancelled at
shutdown. Each run uses its own session and transaction; a failed run is
logged and the loop waits for the next interval.
"""

from __future__ import annotations

import asyncio

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from trackplan.api.v1.dependencies._composition import build_drop_detection_service
from trackplan.application.dtos.alert import AlertCheckSummary
from trackplan.core.config import Settings
from trackplan.infrastructure.persistence.database import get_session_factory
from trackplan.shared.telemetry import get_logger

logger = get_logger(__name__)


async def run_alert_check(
    http_client: httpx.AsyncClient,
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> AlertCheckSummary:
    """Run one drop check in a fresh transaction."""
    factory = session_factory or get_session_factory()
    async with factory() as session:
        async with session.begin():
            service = build_drop_detection_service(session, http_client, settings)
            return await service.check_drops()


async def run_alert_scheduler(
    http_client: httpx.AsyncClient,
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> None:
    """Run the drop check every alert_check_interval_seconds until cancelled."""
    interval = settings.alert_check_interval_seconds
    logger.info("Alert scheduler started (every %ss)", interval)
    while True:
        await asyncio.sleep(interval)
        try:
            await run_alert_check(http_client, settings, session_factory)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Scheduled drop check failed")

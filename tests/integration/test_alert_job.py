"""Scheduled drop check run in its own session and transaction."""

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from trackplan.api.v1.dependencies._composition import (
    build_alert_service,
    build_event_service,
    build_platform_status_service,
)
from trackplan.application.dtos.alert import AlertSettingsUpdate
from trackplan.application.dtos.event import EventDraft
from trackplan.application.dtos.platform_status import StatusChange
from trackplan.core.config import get_settings
from trackplan.domain.enums import ImplementationStatus, Platform
from trackplan.infrastructure.persistence.repositories import AlertRepository
from trackplan.jobs.alert_job import run_alert_check
from trackplan.shared.utils.datetime import days_ago, format_day


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def _seed(session_factory, enabled: bool = True) -> str:
    settings = get_settings()
    async with session_factory() as session:
        async with session.begin():
            await build_alert_service(session, settings).save_settings(
                AlertSettingsUpdate(
                    matomo_url="https://matomo.example.com/index.php",
                    matomo_token="token",
                    matomo_site_ids="web:1",
                    drop_threshold=50,
                    is_enabled=enabled,
                )
            )
            event = await build_event_service(session, settings).create_event(
                EventDraft(category="Search", action="query", platforms=(Platform.WEB,))
            )
            await build_platform_status_service(session).set_platform_status(
                event.id,
                Platform.WEB,
                StatusChange(implementation_status=ImplementationStatus.IMPLEMENTED),
                None,
            )
    return event.id


def _matomo(counts: dict[str, int]) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        day = request.url.params["date"]
        return httpx.Response(200, json=[{"nb_events": counts.get(day, 0)}])

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def test_run_alert_check_persists_alerts(session_factory) -> None:
    event_id = await _seed(session_factory)
    counts = {format_day(days_ago(1)): 40, format_day(days_ago(2)): 100}

    async with _matomo(counts) as http_client:
        summary = await run_alert_check(http_client, get_settings(), session_factory)

    assert summary.checked == 1
    assert summary.alerts_created == 1
    async with session_factory() as session:
        page = await AlertRepository(session).list_alerts(10, 0)
    assert page.total == 1
    assert page.items[0].event_id == event_id
    assert page.items[0].drop_percent == 60


async def test_run_alert_check_below_threshold(session_factory) -> None:
    await _seed(session_factory)
    counts = {format_day(days_ago(1)): 80, format_day(days_ago(2)): 100}

    async with _matomo(counts) as http_client:
        summary = await run_alert_check(http_client, get_settings(), session_factory)

    assert summary.checked == 1
    assert summary.alerts_created == 0


async def test_run_alert_check_disabled(session_factory) -> None:
    await _seed(session_factory, enabled=False)

    async with _matomo({}) as http_client:
        summary = await run_alert_check(http_client, get_settings(), session_factory)

    assert summary.skipped_reason == "disabled"

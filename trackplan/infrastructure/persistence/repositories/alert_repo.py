"""Alert and alert settings repositories."""

from collections.abc import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from trackplan.application.dtos.alert import (
    AlertPage,
    AlertResult,
    AlertSettingsResult,
    AlertSettingsUpdate,
    AlertToCreate,
)
from trackplan.domain.enums import Platform
from trackplan.infrastructure.persistence.models.alert import Alert, AlertSettings
from trackplan.infrastructure.persistence.repositories.base import BaseRepository
from trackplan.shared.utils.datetime import ensure_utc, utc_now


def _alert_to_result(a: Alert) -> AlertResult:
    return AlertResult(
        id=a.id,
        event_id=a.event_id,
        platform=Platform(a.platform),
        event_category=a.event_category,
        event_action=a.event_action,
        yesterday_count=a.yesterday_count,
        day_before_count=a.day_before_count,
        drop_percent=a.drop_percent,
        checked_at=ensure_utc(a.checked_at),
        is_resolved=a.is_resolved,
    )


def _settings_to_result(s: AlertSettings) -> AlertSettingsResult:
    return AlertSettingsResult(
        matomo_url=s.matomo_url,
        matomo_token=s.matomo_token,
        matomo_site_ids=s.matomo_site_ids,
        drop_threshold=s.drop_threshold,
        max_concurrency=s.max_concurrency,
        is_enabled=s.is_enabled,
    )


class AlertRepository(BaseRepository[Alert]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Alert)

    async def create_alerts(self, alerts: Sequence[AlertToCreate]) -> list[AlertResult]:
        checked_at = utc_now()
        rows = [
            Alert(
                event_id=a.event_id,
                platform=a.platform.value,
                event_category=a.event_category,
                event_action=a.event_action,
                yesterday_count=a.yesterday_count,
                day_before_count=a.day_before_count,
                drop_percent=a.drop_percent,
                checked_at=checked_at,
                is_resolved=False,
            )
            for a in alerts
        ]
        self.db.add_all(rows)
        await self.db.flush()
        return [_alert_to_result(r) for r in rows]

    async def list_alerts(self, limit: int, offset: int) -> AlertPage:
        total = await self.db.execute(select(func.count(Alert.id)))
        result = await self.db.execute(
            select(Alert)
            .order_by(Alert.checked_at.desc(), Alert.id)
            .offset(offset)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        return AlertPage(
            items=[_alert_to_result(a) for a in result.scalars().all()],
            total=int(total.scalar() or 0),
        )

    async def delete_alert(self, alert_id: str) -> bool:
        row = await self.get_entity_by_id(alert_id)
        if row is None:
            return False
        await self.delete(row)
        return True

    async def delete_alerts(self, alert_ids: Sequence[str]) -> int:
        if not alert_ids:
            return 0
        result = await self.db.execute(
            delete(Alert)
            .where(Alert.id.in_(list(alert_ids)))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0


class AlertSettingsRepository(BaseRepository[AlertSettings]):
    """Single-row settings table; the first row is the active one."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, AlertSettings)

    async def _get_row(self) -> AlertSettings | None:
        result = await self.db.execute(
            select(AlertSettings).order_by(AlertSettings.created_at).limit(1)
        )
        return result.scalar_one_or_none()

    async def get_settings(self) -> AlertSettingsResult | None:
        row = await self._get_row()
        return _settings_to_result(row) if row else None

    async def save_settings(self, data: AlertSettingsUpdate) -> AlertSettingsResult:
        row = await self._get_row()
        if row is None:
            row = await self.create(AlertSettings())
        row.matomo_url = data.matomo_url
        row.matomo_token = data.matomo_token
        row.matomo_site_ids = data.matomo_site_ids
        row.drop_threshold = data.drop_threshold
        row.max_concurrency = data.max_concurrency
        row.is_enabled = data.is_enabled
        row.updated_at = utc_now()
        await self.db.flush()
        return _settings_to_result(row)

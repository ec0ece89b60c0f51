"""Platform status repository: status rows and their append-only history."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from trackplan.application.dtos.platform_status import (
    PlatformStatusResult,
    StatusHistoryEntry,
    StatusHistoryResult,
)
from trackplan.domain.enums import (
    ImplementationStatus,
    Platform,
    StatusType,
    ValidationStatus,
)
from trackplan.domain.exceptions import ResourceNotFoundException
from trackplan.infrastructure.persistence.database import atomic
from trackplan.infrastructure.persistence.models.event_platform_status import (
    EventPlatformStatus,
)
from trackplan.infrastructure.persistence.models.status_history import StatusHistory
from trackplan.infrastructure.persistence.repositories.base import BaseRepository
from trackplan.shared.utils.datetime import ensure_utc, utc_now


def _status_to_result(s: EventPlatformStatus) -> PlatformStatusResult:
    return PlatformStatusResult(
        id=s.id,
        event_id=s.event_id,
        version_number=s.version_number,
        platform=Platform(s.platform),
        jira_link=s.jira_link,
        implementation_status=ImplementationStatus(s.implementation_status),
        validation_status=ValidationStatus(s.validation_status),
        created_at=ensure_utc(s.created_at),
        updated_at=ensure_utc(s.updated_at),
    )


def _history_to_result(h: StatusHistory) -> StatusHistoryResult:
    return StatusHistoryResult(
        id=h.id,
        event_platform_status_id=h.event_platform_status_id,
        status_type=StatusType(h.status_type),
        old_status=h.old_status,
        new_status=h.new_status,
        changed_by_user_id=h.changed_by_user_id,
        comment=h.comment,
        jira_link=h.jira_link,
        created_at=ensure_utc(h.created_at),
    )


class PlatformStatusRepository(BaseRepository[EventPlatformStatus]):
    """Status/history storage. History rows are only inserted or cascade-deleted."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, EventPlatformStatus)

    async def get_status(
        self, event_id: str, platform: Platform, version_number: int
    ) -> PlatformStatusResult | None:
        result = await self.db.execute(
            select(EventPlatformStatus)
            .where(
                EventPlatformStatus.event_id == event_id,
                EventPlatformStatus.platform == platform.value,
                EventPlatformStatus.version_number == version_number,
            )
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        return _status_to_result(row) if row else None

    async def list_statuses(
        self, event_id: str, version_number: int
    ) -> list[PlatformStatusResult]:
        result = await self.db.execute(
            select(EventPlatformStatus)
            .where(
                EventPlatformStatus.event_id == event_id,
                EventPlatformStatus.version_number == version_number,
            )
            .order_by(EventPlatformStatus.platform)
            .execution_options(populate_existing=True)
        )
        return [_status_to_result(s) for s in result.scalars().all()]

    async def list_history(self, status_id: str) -> list[StatusHistoryResult]:
        return (await self.list_history_for_statuses([status_id])).get(status_id, [])

    async def list_history_for_statuses(
        self, status_ids: Sequence[str]
    ) -> dict[str, list[StatusHistoryResult]]:
        """Load history for many statuses in one query, newest first per status."""
        if not status_ids:
            return {}
        result = await self.db.execute(
            select(StatusHistory)
            .where(StatusHistory.event_platform_status_id.in_(list(status_ids)))
            .order_by(StatusHistory.created_at.desc(), StatusHistory.status_type.desc())
        )
        grouped: dict[str, list[StatusHistoryResult]] = {sid: [] for sid in status_ids}
        for h in result.scalars().all():
            grouped[h.event_platform_status_id].append(_history_to_result(h))
        return grouped

    async def create_default_statuses(
        self, event_id: str, version_number: int, platforms: Sequence[Platform]
    ) -> None:
        """Insert draft/pending statuses (no history) for each platform."""
        for platform in platforms:
            self.db.add(
                EventPlatformStatus(
                    event_id=event_id,
                    version_number=version_number,
                    platform=platform.value,
                    implementation_status=ImplementationStatus.DRAFT.value,
                    validation_status=ValidationStatus.PENDING.value,
                )
            )
        await self.db.flush()

    async def delete_statuses(
        self,
        event_id: str,
        version_number: int | None = None,
        platforms: Sequence[Platform] | None = None,
    ) -> int:
        """Delete history then status rows of an event (optionally one version / some platforms)."""
        conditions = [EventPlatformStatus.event_id == event_id]
        if version_number is not None:
            conditions.append(EventPlatformStatus.version_number == version_number)
        if platforms is not None:
            if not platforms:
                return 0
            conditions.append(
                EventPlatformStatus.platform.in_([p.value for p in platforms])
            )
        status_ids = select(EventPlatformStatus.id).where(*conditions)
        await self.db.execute(
            delete(StatusHistory)
            .where(StatusHistory.event_platform_status_id.in_(status_ids))
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(
            delete(EventPlatformStatus)
            .where(*conditions)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def apply_status_change(
        self,
        status_id: str,
        history: Sequence[StatusHistoryEntry],
        updates: dict[str, Any],
        expected: dict[str, Any],
    ) -> PlatformStatusResult | None:
        """Update the status row if it still holds `expected`, then append history.

        Returns None when a concurrent change got there first; nothing is
        written in that case. History rows of one change share a timestamp
        and list validation before implementation.
        """
        now = utc_now()
        conditions = [EventPlatformStatus.id == status_id]
        for column, value in expected.items():
            attr = getattr(EventPlatformStatus, column)
            conditions.append(attr.is_(None) if value is None else attr == value)
        async with atomic(self.db, "set_platform_status"):
            result = await self.db.execute(
                update(EventPlatformStatus)
                .where(*conditions)
                .values(**updates, updated_at=now)
                .execution_options(synchronize_session=False)
            )
            if not result.rowcount:
                return None
            for entry in history:
                self.db.add(
                    StatusHistory(
                        event_platform_status_id=status_id,
                        status_type=entry.status_type.value,
                        old_status=entry.old_status,
                        new_status=entry.new_status,
                        changed_by_user_id=entry.changed_by_user_id,
                        comment=entry.comment,
                        jira_link=entry.jira_link,
                        created_at=now,
                    )
                )
            await self.db.flush()
        row = await self.get_entity_by_id(status_id)
        if row is None:
            raise ResourceNotFoundException("event_platform_status", status_id)
        return _status_to_result(row)

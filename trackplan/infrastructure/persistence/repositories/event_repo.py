"""Event repository: read projections over live events and their current-version statuses."""

from sqlalchemy import ColumnElement, and_, exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from trackplan.application.dtos.event import (
    EventListFilters,
    EventPage,
    EventResult,
    EventStats,
    EventVersionResult,
    MonitoredEvent,
)
from trackplan.domain.enums import ImplementationStatus, Platform
from trackplan.domain.value_objects import properties_from_json
from trackplan.infrastructure.persistence.models.category import Category
from trackplan.infrastructure.persistence.models.event import Event
from trackplan.infrastructure.persistence.models.event_platform_status import (
    EventPlatformStatus,
)
from trackplan.infrastructure.persistence.models.event_version import EventVersion
from trackplan.infrastructure.persistence.repositories.base import BaseRepository
from trackplan.shared.utils.datetime import ensure_utc


def _platforms(raw: list[str] | None) -> tuple[Platform, ...]:
    return tuple(Platform(p) for p in raw or [])


def event_to_result(e: Event, category_name: str) -> EventResult:
    """Map ORM Event to EventResult (category name passed to avoid lazy loads)."""
    return EventResult(
        id=e.id,
        category_id=e.category_id,
        category=category_name,
        block=e.block,
        action=e.action,
        action_description=e.action_description,
        name=e.name,
        value_description=e.value_description,
        owner_id=e.owner_id,
        author_id=e.author_id,
        platforms=_platforms(e.platforms),
        properties=properties_from_json(e.properties),
        notes=e.notes,
        current_version=e.current_version,
        created_at=ensure_utc(e.created_at),
        updated_at=ensure_utc(e.updated_at),
    )


def version_to_result(v: EventVersion, category_name: str) -> EventVersionResult:
    return EventVersionResult(
        id=v.id,
        event_id=v.event_id,
        version=v.version,
        category_id=v.category_id,
        category=category_name,
        block=v.block,
        action=v.action,
        action_description=v.action_description,
        name=v.name,
        value_description=v.value_description,
        owner_id=v.owner_id,
        platforms=_platforms(v.platforms),
        properties=properties_from_json(v.properties),
        notes=v.notes,
        change_description=v.change_description,
        author_id=v.author_id,
        created_at=ensure_utc(v.created_at),
    )


def _current_status_exists(*conditions: ColumnElement[bool]) -> ColumnElement[bool]:
    """EXISTS a status row of the event's current version matching conditions."""
    return exists().where(
        EventPlatformStatus.event_id == Event.id,
        EventPlatformStatus.version_number == Event.current_version,
        *conditions,
    )


def _filter_conditions(filters: EventListFilters) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = []
    if filters.search:
        pattern = f"%{filters.search.strip().lower()}%"
        conditions.append(
            or_(
                func.lower(Event.action).like(pattern),
                func.lower(func.coalesce(Event.name, "")).like(pattern),
                func.lower(Category.name).like(pattern),
                func.lower(Event.action_description).like(pattern),
            )
        )
    if filters.category:
        conditions.append(Category.name == filters.category)
    if filters.owner_id:
        conditions.append(Event.owner_id == filters.owner_id)
    if filters.author_id:
        conditions.append(Event.author_id == filters.author_id)

    status_conditions: list[ColumnElement[bool]] = []
    if filters.platform is not None:
        status_conditions.append(EventPlatformStatus.platform == filters.platform.value)
    if filters.implementation_status is not None:
        status_conditions.append(
            EventPlatformStatus.implementation_status
            == filters.implementation_status.value
        )
    if filters.validation_status is not None:
        status_conditions.append(
            EventPlatformStatus.validation_status == filters.validation_status.value
        )
    if filters.jira:
        status_conditions.append(
            func.lower(EventPlatformStatus.jira_link).like(
                f"%{filters.jira.strip().lower()}%"
            )
        )
    if status_conditions:
        conditions.append(_current_status_exists(*status_conditions))
    return conditions


class EventRepository(BaseRepository[Event]):
    """Event read repository. Writes go through VersionedEventRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Event)

    async def get_by_id(self, event_id: str) -> EventResult | None:
        result = await self.db.execute(
            select(Event, Category.name)
            .join(Category, Category.id == Event.category_id)
            .where(Event.id == event_id)
            .execution_options(populate_existing=True)
        )
        row = result.first()
        return event_to_result(row[0], row[1]) if row else None

    async def find_by_category_action(
        self, category: str, action: str
    ) -> EventResult | None:
        result = await self.db.execute(
            select(Event, Category.name)
            .join(Category, Category.id == Event.category_id)
            .where(Category.name == category, Event.action == action)
            .limit(1)
            .execution_options(populate_existing=True)
        )
        row = result.first()
        return event_to_result(row[0], row[1]) if row else None

    async def list_events(self, filters: EventListFilters) -> EventPage:
        conditions = _filter_conditions(filters)
        total_result = await self.db.execute(
            select(func.count(Event.id))
            .join(Category, Category.id == Event.category_id)
            .where(*conditions)
        )
        total = int(total_result.scalar() or 0)
        result = await self.db.execute(
            select(Event)
            .join(Event.category)
            .options(contains_eager(Event.category))
            .where(*conditions)
            .order_by(Event.created_at.desc(), Event.id)
            .offset(filters.offset)
            .limit(filters.limit)
            .execution_options(populate_existing=True)
        )
        items = [event_to_result(e, e.category.name) for e in result.scalars().all()]
        return EventPage(items=items, total=total)

    async def get_stats(self) -> EventStats:
        total = await self.db.execute(select(func.count(Event.id)))
        current = and_(
            EventPlatformStatus.event_id == Event.id,
            EventPlatformStatus.version_number == Event.current_version,
        )
        impl = await self.db.execute(
            select(EventPlatformStatus.implementation_status, func.count())
            .join(Event, current)
            .group_by(EventPlatformStatus.implementation_status)
        )
        valid = await self.db.execute(
            select(EventPlatformStatus.validation_status, func.count())
            .join(Event, current)
            .group_by(EventPlatformStatus.validation_status)
        )
        return EventStats(
            total_events=int(total.scalar() or 0),
            by_implementation_status={s: int(n) for s, n in impl.all()},
            by_validation_status={s: int(n) for s, n in valid.all()},
        )

    async def get_events_for_monitoring(self) -> list[MonitoredEvent]:
        """Events with platforms whose current-version status is 'implemented'."""
        result = await self.db.execute(
            select(Event.id, Category.name, Event.action, EventPlatformStatus.platform)
            .join(Category, Category.id == Event.category_id)
            .join(
                EventPlatformStatus,
                and_(
                    EventPlatformStatus.event_id == Event.id,
                    EventPlatformStatus.version_number == Event.current_version,
                ),
            )
            .where(
                EventPlatformStatus.implementation_status
                == ImplementationStatus.IMPLEMENTED.value
            )
            .order_by(Event.id, EventPlatformStatus.platform)
        )
        grouped: dict[str, tuple[str, str, list[Platform]]] = {}
        for event_id, category, action, platform in result.all():
            entry = grouped.setdefault(event_id, (category, action, []))
            entry[2].append(Platform(platform))
        return [
            MonitoredEvent(
                event_id=event_id,
                category=category,
                action=action,
                platforms=tuple(platforms),
            )
            for event_id, (category, action, platforms) in grouped.items()
        ]

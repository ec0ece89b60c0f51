"""Versioned event writer: atomic multi-table writes for events.

Every public method runs as one atomic unit (see database.atomic): the event
row, its version snapshots and per-platform statuses change together or not
at all. current_version is advanced with a compare-and-set UPDATE; a
concurrent writer that already advanced it makes the loser fail with
VersionConflictException instead of silently overwriting.
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from trackplan.application.dtos.event import EventDraft, EventResult
from trackplan.application.dtos.platform_status import PlatformStatusResult
from trackplan.core.constants import (
    INITIAL_VERSION_DESCRIPTION,
    VERSION_UPDATE_DESCRIPTION,
)
from trackplan.domain.enums import Platform
from trackplan.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    VersionConflictException,
)
from trackplan.domain.value_objects import properties_to_json
from trackplan.infrastructure.persistence.database import atomic
from trackplan.infrastructure.persistence.models.alert import Alert
from trackplan.infrastructure.persistence.models.comment import Comment
from trackplan.infrastructure.persistence.models.event import Event
from trackplan.infrastructure.persistence.models.event_version import EventVersion
from trackplan.infrastructure.persistence.repositories.category_repo import (
    CategoryRepository,
)
from trackplan.infrastructure.persistence.repositories.event_repo import (
    EventRepository,
)
from trackplan.infrastructure.persistence.repositories.platform_status_repo import (
    PlatformStatusRepository,
)
from trackplan.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


def _platform_values(platforms: tuple[Platform, ...] | list[Platform]) -> list[str]:
    return [p.value for p in platforms]


def _non_versioned_values(draft: EventDraft) -> dict:
    """Fields editable in place on the live row and the current snapshot."""
    return {
        "block": draft.block,
        "action_description": draft.action_description,
        "owner_id": draft.owner_id,
        "platforms": _platform_values(draft.platforms),
        "notes": draft.notes,
    }


def _versioned_values(draft: EventDraft, category_id: str) -> dict:
    return {
        "category_id": category_id,
        "action": draft.action,
        "name": draft.name,
        "value_description": draft.value_description,
        "properties": properties_to_json(draft.properties),
    }


class VersionedEventRepository:
    """Writes events, version snapshots and platform statuses in one session."""

    def __init__(
        self,
        db: AsyncSession,
        category_repo: CategoryRepository | None = None,
        status_repo: PlatformStatusRepository | None = None,
        event_repo: EventRepository | None = None,
    ) -> None:
        self.db = db
        self.categories = category_repo or CategoryRepository(db)
        self.statuses = status_repo or PlatformStatusRepository(db)
        self.events = event_repo or EventRepository(db)

    async def _load(self, event_id: str) -> EventResult:
        event = await self.events.get_by_id(event_id)
        if event is None:
            raise ResourceNotFoundException("event", event_id)
        return event

    def _add_version(
        self,
        event_id: str,
        version: int,
        category_id: str,
        draft: EventDraft,
        change_description: str,
        author_id: str | None,
    ) -> None:
        self.db.add(
            EventVersion(
                event_id=event_id,
                version=version,
                change_description=change_description,
                author_id=author_id,
                **_versioned_values(draft, category_id),
                **_non_versioned_values(draft),
            )
        )

    async def create_event_with_version_and_statuses(
        self, draft: EventDraft, author_id: str | None
    ) -> EventResult:
        """Insert event (version 1), its first snapshot and default statuses."""
        async with atomic(self.db, "create_event"):
            category = await self.categories.get_or_create(draft.category)
            event = Event(
                author_id=author_id,
                current_version=1,
                **_versioned_values(draft, category.id),
                **_non_versioned_values(draft),
            )
            self.db.add(event)
            await self.db.flush()
            self._add_version(
                event.id, 1, category.id, draft, INITIAL_VERSION_DESCRIPTION, author_id
            )
            await self.statuses.create_default_statuses(event.id, 1, draft.platforms)
            event_id = event.id
        logger.info(
            "Created event %s (%s / %s) with platforms %s",
            event_id,
            draft.category,
            draft.action,
            _platform_values(draft.platforms),
        )
        return await self._load(event_id)

    async def update_event_with_new_version(
        self,
        event_id: str,
        draft: EventDraft,
        expected_version: int,
        change_description: str | None,
        author_id: str | None,
    ) -> EventResult:
        """Advance to expected_version + 1 with a new snapshot and fresh statuses.

        Statuses of earlier versions are kept as they were.
        """
        new_version = expected_version + 1
        async with atomic(self.db, "update_event_new_version"):
            category = await self.categories.get_or_create(draft.category)
            result = await self.db.execute(
                update(Event)
                .where(Event.id == event_id, Event.current_version == expected_version)
                .values(
                    current_version=new_version,
                    updated_at=utc_now(),
                    **_versioned_values(draft, category.id),
                    **_non_versioned_values(draft),
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise VersionConflictException(event_id, expected_version)
            self._add_version(
                event_id,
                new_version,
                category.id,
                draft,
                change_description
                or VERSION_UPDATE_DESCRIPTION.format(version=new_version),
                author_id,
            )
            await self.db.flush()
            await self.statuses.create_default_statuses(
                event_id, new_version, draft.platforms
            )
        logger.info("Event %s advanced to version %d", event_id, new_version)
        return await self._load(event_id)

    async def update_event_without_new_version(
        self, event_id: str, draft: EventDraft, current_version: int
    ) -> EventResult:
        """Update non-versioned fields on the live row and the current snapshot.

        Platform statuses of the current version are reconciled with the new
        platform set: added platforms get default rows, removed platforms lose
        their row and its history.
        """
        async with atomic(self.db, "update_event_in_place"):
            result = await self.db.execute(
                update(Event)
                .where(Event.id == event_id, Event.current_version == current_version)
                .values(updated_at=utc_now(), **_non_versioned_values(draft))
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise VersionConflictException(event_id, current_version)
            await self.db.execute(
                update(EventVersion)
                .where(
                    EventVersion.event_id == event_id,
                    EventVersion.version == current_version,
                )
                .values(**_non_versioned_values(draft))
                .execution_options(synchronize_session=False)
            )
            existing = {
                s.platform
                for s in await self.statuses.list_statuses(event_id, current_version)
            }
            wanted = set(draft.platforms)
            added = [p for p in draft.platforms if p not in existing]
            removed = sorted(existing - wanted, key=lambda p: p.value)
            await self.statuses.create_default_statuses(
                event_id, current_version, added
            )
            if removed:
                await self.statuses.delete_statuses(
                    event_id, current_version, removed
                )
        if added or removed:
            logger.info(
                "Event %s v%d platforms reconciled: +%s -%s",
                event_id,
                current_version,
                _platform_values(added),
                _platform_values(removed),
            )
        return await self._load(event_id)

    async def _set_platforms(
        self, event_id: str, version_number: int, platforms: list[str]
    ) -> None:
        await self.db.execute(
            update(Event)
            .where(Event.id == event_id)
            .values(platforms=platforms, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(
            update(EventVersion)
            .where(
                EventVersion.event_id == event_id,
                EventVersion.version == version_number,
            )
            .values(platforms=platforms)
            .execution_options(synchronize_session=False)
        )

    async def add_platform(
        self, event_id: str, platform: Platform, version_number: int
    ) -> PlatformStatusResult:
        """Add platform to the event and snapshot with a default status row."""
        async with atomic(self.db, "add_platform"):
            event = await self._load(event_id)
            if await self.statuses.get_status(event_id, platform, version_number):
                raise ConflictException(
                    f"Platform status already exists for {platform.value} "
                    f"on version {version_number}",
                    "platform_status_exists",
                    {"platform": platform.value, "version_number": version_number},
                )
            platforms = _platform_values(event.platforms)
            if platform.value not in platforms:
                platforms.append(platform.value)
            await self._set_platforms(event_id, version_number, platforms)
            await self.statuses.create_default_statuses(
                event_id, version_number, [platform]
            )
        status = await self.statuses.get_status(event_id, platform, version_number)
        assert status is not None
        return status

    async def remove_platform(
        self, event_id: str, platform: Platform, version_number: int
    ) -> None:
        """Remove platform from event and snapshot; delete its status and history."""
        async with atomic(self.db, "remove_platform"):
            event = await self._load(event_id)
            status = await self.statuses.get_status(event_id, platform, version_number)
            if status is None:
                raise ResourceNotFoundException(
                    "event_platform_status", f"{event_id}/{platform.value}/{version_number}"
                )
            await self.statuses.delete_statuses(event_id, version_number, [platform])
            platforms = [p for p in _platform_values(event.platforms) if p != platform.value]
            await self._set_platforms(event_id, version_number, platforms)

    async def delete_event_with_related_data(self, event_id: str) -> bool:
        """Delete history, statuses, versions, comments, then the event.

        Alerts referencing the event keep their rows with event_id cleared.
        """
        async with atomic(self.db, "delete_event"):
            found = await self.db.execute(select(Event.id).where(Event.id == event_id))
            if found.scalar_one_or_none() is None:
                return False
            await self.statuses.delete_statuses(event_id)
            await self.db.execute(
                delete(EventVersion)
                .where(EventVersion.event_id == event_id)
                .execution_options(synchronize_session=False)
            )
            await self.db.execute(
                delete(Comment)
                .where(Comment.event_id == event_id)
                .execution_options(synchronize_session=False)
            )
            await self.db.execute(
                update(Alert)
                .where(Alert.event_id == event_id)
                .values(event_id=None)
                .execution_options(synchronize_session=False)
            )
            await self.db.execute(
                delete(Event)
                .where(Event.id == event_id)
                .execution_options(synchronize_session=False)
            )
        logger.info("Deleted event %s with related data", event_id)
        return True

"""Event operations: create, update (versioned or in place), delete, and reads.

EventService is the entry point the route layer uses for the versioning
core. It normalizes input, applies the version decision, and delegates
every multi-table write to the atomic version writer.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from trackplan.application.dtos.event import (
    EventDraft,
    EventListFilters,
    EventPage,
    EventResult,
    EventStats,
    EventVersionResult,
)
from trackplan.application.interfaces.repositories import (
    IEventRepository,
    IEventVersionRepository,
    IEventVersionWriter,
)
from trackplan.application.services.version_policy import (
    NON_VERSIONED_FIELDS,
    VERSIONED_FIELDS,
    decide_version,
)
from trackplan.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
    VersionConflictException,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(VERSIONED_FIELDS + NON_VERSIONED_FIELDS)


def normalize_draft(draft: EventDraft) -> EventDraft:
    """Trim identity strings, drop blank optionals, de-duplicate platforms (order kept)."""
    category = (draft.category or "").strip()
    if not category:
        raise ValidationException("Category name must not be empty", field="category")
    action = (draft.action or "").strip()
    if not action:
        raise ValidationException("Action must not be empty", field="action")
    names = [p.name for p in draft.properties]
    if len(names) != len(set(names)):
        raise ValidationException("Property names must be unique", field="properties")
    return replace(
        draft,
        category=category,
        action=action,
        action_description=draft.action_description or "",
        name=(draft.name or "").strip() or None,
        value_description=(draft.value_description or "").strip() or None,
        platforms=tuple(dict.fromkeys(draft.platforms)),
        properties=tuple(draft.properties),
    )


class EventService:
    """Create, update, delete and query tracked events."""

    def __init__(
        self,
        event_repo: IEventRepository,
        version_repo: IEventVersionRepository,
        writer: IEventVersionWriter,
        max_list_limit: int = 500,
    ) -> None:
        self.event_repo = event_repo
        self.version_repo = version_repo
        self.writer = writer
        self.max_list_limit = max_list_limit

    async def _ensure_unique_identity(
        self, category: str, action: str, event_id: str | None = None
    ) -> None:
        existing = await self.event_repo.find_by_category_action(category, action)
        if existing is not None and existing.id != event_id:
            raise ConflictException(
                f"Event '{action}' already exists in category '{category}'",
                "duplicate_event",
                {"category": category, "action": action, "event_id": existing.id},
            )

    async def create_event(
        self, draft: EventDraft, author_id: str | None = None
    ) -> EventResult:
        """Create an event at version 1 with draft/pending statuses per platform."""
        draft = normalize_draft(draft)
        await self._ensure_unique_identity(draft.category, draft.action)
        return await self.writer.create_event_with_version_and_statuses(
            draft, author_id
        )

    async def update_event(
        self,
        event_id: str,
        changes: Mapping[str, Any],
        change_description: str | None = None,
        author_id: str | None = None,
        expected_version: int | None = None,
    ) -> EventResult:
        """Apply a partial update; cut a new version only if identity fields changed.

        Args:
            event_id: Event to update.
            changes: Field name → new value; omitted fields keep current values.
            change_description: Text for the new version (default generated).
            author_id: Acting user recorded on a new version.
            expected_version: When given, reject the update if the event's
                current version differs (client-side optimistic check).

        Raises:
            ResourceNotFoundException: event does not exist.
            ValidationException: unknown field or invalid value.
            VersionConflictException: version moved since it was read.
            ConflictException: new category/action collides with another event.
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            field = sorted(unknown)[0]
            raise ValidationException(f"Field cannot be updated: {field}", field=field)
        current = await self.get_event(event_id)
        if expected_version is not None and expected_version != current.current_version:
            raise VersionConflictException(event_id, expected_version)

        proposed = normalize_draft(replace(current.to_draft(), **dict(changes)))
        snapshot = await self.version_repo.get_version(event_id, current.current_version)
        decision = decide_version(snapshot or current.to_draft(), proposed)

        if not decision.requires_new_version:
            return await self.writer.update_event_without_new_version(
                event_id, proposed, current.current_version
            )

        if {"category", "action"} & set(decision.changed_fields):
            await self._ensure_unique_identity(
                proposed.category, proposed.action, event_id
            )
        logger.info(
            "Event %s requires new version (changed: %s)",
            event_id,
            ", ".join(decision.changed_fields),
        )
        return await self.writer.update_event_with_new_version(
            event_id,
            proposed,
            current.current_version,
            change_description,
            author_id,
        )

    async def delete_event(self, event_id: str) -> None:
        """Delete the event with all versions, statuses, history and comments."""
        deleted = await self.writer.delete_event_with_related_data(event_id)
        if not deleted:
            raise ResourceNotFoundException("event", event_id)

    async def get_event(self, event_id: str) -> EventResult:
        event = await self.event_repo.get_by_id(event_id)
        if event is None:
            raise ResourceNotFoundException("event", event_id)
        return event

    async def list_events(self, filters: EventListFilters) -> EventPage:
        limit = max(1, min(filters.limit, self.max_list_limit))
        return await self.event_repo.list_events(
            replace(filters, limit=limit, offset=max(0, filters.offset))
        )

    async def get_stats(self) -> EventStats:
        return await self.event_repo.get_stats()

    async def list_versions(self, event_id: str) -> list[EventVersionResult]:
        await self.get_event(event_id)
        return await self.version_repo.list_versions(event_id)

    async def get_version(self, event_id: str, version: int) -> EventVersionResult:
        snapshot = await self.version_repo.get_version(event_id, version)
        if snapshot is None:
            raise ResourceNotFoundException("event_version", f"{event_id}/v{version}")
        return snapshot

"""Platform status ledger: per-version status reads, transitions with history, platform add/remove."""

from __future__ import annotations

import logging

from trackplan.application.dtos.platform_status import (
    PlatformStatusResult,
    PlatformStatusWithHistory,
    StatusChange,
    StatusHistoryEntry,
)
from trackplan.application.interfaces.repositories import (
    IEventRepository,
    IEventVersionWriter,
    IPlatformStatusRepository,
)
from trackplan.domain.enums import Platform, StatusType
from trackplan.domain.exceptions import ConflictException, ResourceNotFoundException

logger = logging.getLogger(__name__)

STATUS_WRITE_ATTEMPTS = 3


def build_history_entries(
    status: PlatformStatusResult,
    change: StatusChange,
    acting_user_id: str | None,
) -> list[StatusHistoryEntry]:
    """One entry per status field whose requested value differs from the stored one."""
    entries: list[StatusHistoryEntry] = []
    pairs = (
        (
            StatusType.IMPLEMENTATION,
            status.implementation_status,
            change.implementation_status,
        ),
        (StatusType.VALIDATION, status.validation_status, change.validation_status),
    )
    for status_type, old, new in pairs:
        if new is None or new == old:
            continue
        entries.append(
            StatusHistoryEntry(
                status_type=status_type,
                old_status=old.value,
                new_status=new.value,
                changed_by_user_id=acting_user_id,
                comment=change.comment,
                jira_link=change.status_jira_link,
            )
        )
    return entries


def _stored_values(
    status: PlatformStatusResult, updates: dict[str, str | None]
) -> dict[str, str | None]:
    """Column values the status row must still hold for updates to apply."""
    stored = {
        "implementation_status": status.implementation_status.value,
        "validation_status": status.validation_status.value,
        "jira_link": status.jira_link,
    }
    return {column: stored[column] for column in updates}


class PlatformStatusService:
    """Status/history ledger operations for event platforms."""

    def __init__(
        self,
        event_repo: IEventRepository,
        status_repo: IPlatformStatusRepository,
        writer: IEventVersionWriter,
    ) -> None:
        self.event_repo = event_repo
        self.status_repo = status_repo
        self.writer = writer

    async def _current_version(self, event_id: str) -> int:
        event = await self.event_repo.get_by_id(event_id)
        if event is None:
            raise ResourceNotFoundException("event", event_id)
        return event.current_version

    async def get_event_platform_status(
        self, event_id: str, platform: Platform, version_number: int | None = None
    ) -> PlatformStatusWithHistory:
        """Return one status (current version by default) with its history, newest first."""
        version = version_number or await self._current_version(event_id)
        status = await self.status_repo.get_status(event_id, platform, version)
        if status is None:
            raise ResourceNotFoundException(
                "event_platform_status", f"{event_id}/{platform.value}/v{version}"
            )
        history = await self.status_repo.list_history(status.id)
        return PlatformStatusWithHistory(status=status, history=history)

    async def list_platform_statuses(
        self, event_id: str, version_number: int | None = None
    ) -> list[PlatformStatusWithHistory]:
        """Return statuses of one version (current by default), history batch-loaded."""
        version = version_number or await self._current_version(event_id)
        statuses = await self.status_repo.list_statuses(event_id, version)
        histories = await self.status_repo.list_history_for_statuses(
            [s.id for s in statuses]
        )
        return [
            PlatformStatusWithHistory(status=s, history=histories.get(s.id, []))
            for s in statuses
        ]

    async def set_platform_status(
        self,
        event_id: str,
        platform: Platform,
        change: StatusChange,
        acting_user_id: str | None,
    ) -> PlatformStatusWithHistory:
        """Apply a status change; append history only for fields that actually change.

        Resending the stored values writes nothing. jira_link updates the
        status row itself and is not recorded in history.
        """
        for _ in range(STATUS_WRITE_ATTEMPTS):
            current = await self.get_event_platform_status(
                event_id, platform, change.version_number
            )
            status = current.status
            entries = build_history_entries(status, change, acting_user_id)
            updates: dict[str, str | None] = {
                f"{e.status_type.value}_status": e.new_status for e in entries
            }
            if change.jira_link is not None:
                link = change.jira_link.strip() or None
                if link != status.jira_link:
                    updates["jira_link"] = link
            if not updates:
                return current

            updated = await self.status_repo.apply_status_change(
                status.id, entries, updates, _stored_values(status, updates)
            )
            if updated is not None:
                break
            logger.info("Status %s changed concurrently; re-reading", status.id)
        else:
            raise ConflictException(
                "Status was changed by another request; reload and retry.",
                "status_changed",
                {"event_id": event_id, "platform": platform.value},
            )

        if entries:
            logger.info(
                "Status change on event %s %s v%d: %s",
                event_id,
                platform.value,
                status.version_number,
                "; ".join(
                    f"{e.status_type.value} {e.old_status} -> {e.new_status}"
                    for e in entries
                ),
            )
        history = await self.status_repo.list_history(status.id)
        return PlatformStatusWithHistory(status=updated, history=history)

    async def add_platform(
        self, event_id: str, platform: Platform
    ) -> PlatformStatusResult:
        """Add a platform to the event's current version with a draft/pending status."""
        version = await self._current_version(event_id)
        return await self.writer.add_platform(event_id, platform, version)

    async def remove_platform(self, event_id: str, platform: Platform) -> None:
        """Remove a platform from the current version with its status and history."""
        version = await self._current_version(event_id)
        await self.writer.remove_platform(event_id, platform, version)

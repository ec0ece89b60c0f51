"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from trackplan.application.dtos.alert import (
        AlertPage,
        AlertResult,
        AlertSettingsResult,
        AlertSettingsUpdate,
        AlertToCreate,
    )
    from trackplan.application.dtos.category import CategoryListItem, CategoryResult
    from trackplan.application.dtos.comment import CommentResult
    from trackplan.application.dtos.event import (
        EventDraft,
        EventListFilters,
        EventPage,
        EventResult,
        EventStats,
        EventVersionResult,
        MonitoredEvent,
    )
    from trackplan.application.dtos.platform_status import (
        PlatformStatusResult,
        StatusHistoryEntry,
        StatusHistoryResult,
    )
    from trackplan.application.dtos.user import UserResult
    from trackplan.domain.enums import Platform


class ICategoryRepository(Protocol):
    """Protocol for category persistence (resolver + admin operations)."""

    async def get_by_name(self, name: str) -> CategoryResult | None:
        """Return category by exact name."""

    async def get_or_create(self, name: str) -> CategoryResult:
        """Return existing category or insert it; a concurrent duplicate is re-fetched."""

    async def list_with_counts(self) -> list[CategoryListItem]:
        """Return categories ordered by name with referencing event counts."""

    async def count_events(self, category_id: str) -> int:
        """Return the number of events referencing the category."""

    async def delete_category(self, category_id: str) -> bool:
        """Delete category; return False if it did not exist."""


class IEventRepository(Protocol):
    """Protocol for event read projections."""

    async def get_by_id(self, event_id: str) -> EventResult | None:
        """Return live event by id."""

    async def find_by_category_action(
        self, category: str, action: str
    ) -> EventResult | None:
        """Return event with this category name and action, if any."""

    async def list_events(self, filters: EventListFilters) -> EventPage:
        """Return filtered, paginated events (newest first) and total count."""

    async def get_stats(self) -> EventStats:
        """Return event totals and current-version status counts."""

    async def get_events_for_monitoring(self) -> list[MonitoredEvent]:
        """Return events with the platforms they are implemented on."""


class IEventVersionRepository(Protocol):
    async def list_versions(self, event_id: str) -> list[EventVersionResult]:
        """Return all versions of an event, newest first."""

    async def get_version(
        self, event_id: str, version: int
    ) -> EventVersionResult | None:
        """Return one version snapshot."""


class IEventVersionWriter(Protocol):
    """Protocol for atomic multi-table writes of events, versions and statuses."""

    async def create_event_with_version_and_statuses(
        self, draft: EventDraft, author_id: str | None
    ) -> EventResult:
        """Insert event, version 1 and default statuses in one atomic unit."""

    async def update_event_with_new_version(
        self,
        event_id: str,
        draft: EventDraft,
        expected_version: int,
        change_description: str | None,
        author_id: str | None,
    ) -> EventResult:
        """Advance current_version, insert snapshot and fresh statuses atomically."""

    async def update_event_without_new_version(
        self, event_id: str, draft: EventDraft, current_version: int
    ) -> EventResult:
        """Update non-versioned fields in place and reconcile platform statuses."""

    async def add_platform(
        self, event_id: str, platform: Platform, version_number: int
    ) -> PlatformStatusResult:
        """Add a platform to the event/current version with a default status."""

    async def remove_platform(
        self, event_id: str, platform: Platform, version_number: int
    ) -> None:
        """Remove a platform from the event/current version with its status and history."""

    async def delete_event_with_related_data(self, event_id: str) -> bool:
        """Delete event and all dependent rows; return False if it did not exist."""


class IPlatformStatusRepository(Protocol):
    """Protocol for the status/history ledger storage."""

    async def get_status(
        self, event_id: str, platform: Platform, version_number: int
    ) -> PlatformStatusResult | None:
        """Return the status row for (event, platform, version)."""

    async def list_statuses(
        self, event_id: str, version_number: int
    ) -> list[PlatformStatusResult]:
        """Return all platform statuses of one event version."""

    async def list_history(self, status_id: str) -> list[StatusHistoryResult]:
        """Return history for one status, newest first."""

    async def list_history_for_statuses(
        self, status_ids: Sequence[str]
    ) -> dict[str, list[StatusHistoryResult]]:
        """Return history per status id (batch), newest first."""

    async def apply_status_change(
        self,
        status_id: str,
        history: Sequence[StatusHistoryEntry],
        updates: dict[str, Any],
        expected: dict[str, Any],
    ) -> PlatformStatusResult | None:
        """Update the row if it still holds expected values and append history; None on a lost race."""


class ICommentRepository(Protocol):
    async def list_for_event(self, event_id: str) -> list[CommentResult]:
        """Return comments for the event, newest first."""

    async def create_comment(
        self, event_id: str, content: str, author: str
    ) -> CommentResult:
        """Insert a comment."""

    async def delete_comment(self, event_id: str, comment_id: str) -> bool:
        """Delete a comment of the event; return False if not found."""


class IUserRepository(Protocol):
    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by id."""

    async def get_by_username(self, username: str) -> UserResult | None:
        """Return user by username."""

    async def get_password_hash(self, username: str) -> str | None:
        """Return the stored password hash for username (login only)."""

    async def create_user(
        self,
        username: str,
        hashed_password: str,
        role: str,
        email: str | None = None,
        name: str | None = None,
    ) -> UserResult:
        """Insert a user."""

    async def list_users(self, skip: int = 0, limit: int = 100) -> list[UserResult]:
        """Return users ordered by username."""


class IAlertRepository(Protocol):
    async def create_alerts(self, alerts: Sequence[AlertToCreate]) -> list[AlertResult]:
        """Insert detected alerts."""

    async def list_alerts(self, limit: int, offset: int) -> AlertPage:
        """Return alerts newest first with total count."""

    async def delete_alert(self, alert_id: str) -> bool:
        """Delete one alert; return False if not found."""

    async def delete_alerts(self, alert_ids: Sequence[str]) -> int:
        """Delete alerts by id; return number deleted."""


class IAlertSettingsRepository(Protocol):
    async def get_settings(self) -> AlertSettingsResult | None:
        """Return the stored settings row, if any."""

    async def save_settings(self, data: AlertSettingsUpdate) -> AlertSettingsResult:
        """Insert or replace the settings row."""

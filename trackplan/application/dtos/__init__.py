"""Application DTOs (no ORM dependency)."""

from trackplan.application.dtos.alert import (
    AlertCheckSummary,
    AlertPage,
    AlertResult,
    AlertSettingsResult,
    AlertSettingsUpdate,
    AlertToCreate,
    EffectiveAlertSettings,
)
from trackplan.application.dtos.analytics import CacheStats, EventCountsResult
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
    PlatformStatusWithHistory,
    StatusChange,
    StatusHistoryEntry,
    StatusHistoryResult,
)
from trackplan.application.dtos.user import UserCreate, UserResult

__all__ = [
    "AlertCheckSummary",
    "AlertPage",
    "AlertResult",
    "AlertSettingsResult",
    "AlertSettingsUpdate",
    "AlertToCreate",
    "CacheStats",
    "CategoryListItem",
    "CategoryResult",
    "CommentResult",
    "EffectiveAlertSettings",
    "EventCountsResult",
    "EventDraft",
    "EventListFilters",
    "EventPage",
    "EventResult",
    "EventStats",
    "EventVersionResult",
    "MonitoredEvent",
    "PlatformStatusResult",
    "PlatformStatusWithHistory",
    "StatusChange",
    "StatusHistoryEntry",
    "StatusHistoryResult",
    "UserCreate",
    "UserResult",
]

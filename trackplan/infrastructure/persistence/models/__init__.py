"""ORM models. Import here so Base.metadata sees every table (Alembic, create_all)."""

from trackplan.infrastructure.persistence.models.alert import Alert, AlertSettings
from trackplan.infrastructure.persistence.models.category import Category
from trackplan.infrastructure.persistence.models.comment import Comment
from trackplan.infrastructure.persistence.models.event import Event
from trackplan.infrastructure.persistence.models.event_platform_status import (
    EventPlatformStatus,
)
from trackplan.infrastructure.persistence.models.event_version import EventVersion
from trackplan.infrastructure.persistence.models.status_history import StatusHistory
from trackplan.infrastructure.persistence.models.user import User

__all__ = [
    "Alert",
    "AlertSettings",
    "Category",
    "Comment",
    "Event",
    "EventPlatformStatus",
    "EventVersion",
    "StatusHistory",
    "User",
]

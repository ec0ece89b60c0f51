"""SQLAlchemy repositories (return application DTOs)."""

from trackplan.infrastructure.persistence.repositories.alert_repo import (
    AlertRepository,
    AlertSettingsRepository,
)
from trackplan.infrastructure.persistence.repositories.category_repo import (
    CategoryRepository,
)
from trackplan.infrastructure.persistence.repositories.comment_repo import (
    CommentRepository,
)
from trackplan.infrastructure.persistence.repositories.event_repo import (
    EventRepository,
)
from trackplan.infrastructure.persistence.repositories.event_version_repo import (
    EventVersionRepository,
)
from trackplan.infrastructure.persistence.repositories.platform_status_repo import (
    PlatformStatusRepository,
)
from trackplan.infrastructure.persistence.repositories.user_repo import UserRepository
from trackplan.infrastructure.persistence.repositories.versioned_event_repo import (
    VersionedEventRepository,
)

__all__ = [
    "AlertRepository",
    "AlertSettingsRepository",
    "CategoryRepository",
    "CommentRepository",
    "EventRepository",
    "EventVersionRepository",
    "PlatformStatusRepository",
    "UserRepository",
    "VersionedEventRepository",
]

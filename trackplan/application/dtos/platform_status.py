"""DTOs for the platform status / history ledger (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from trackplan.domain.enums import (
    ImplementationStatus,
    Platform,
    StatusType,
    ValidationStatus,
)


@dataclass(frozen=True)
class PlatformStatusResult:
    id: str
    event_id: str
    version_number: int
    platform: Platform
    jira_link: str | None
    implementation_status: ImplementationStatus
    validation_status: ValidationStatus
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class StatusHistoryResult:
    id: str
    event_platform_status_id: str
    status_type: StatusType
    old_status: str | None
    new_status: str
    changed_by_user_id: str | None
    comment: str | None
    jira_link: str | None
    created_at: datetime


@dataclass(frozen=True)
class StatusHistoryEntry:
    """History row to append (built by the ledger, persisted by the repository)."""

    status_type: StatusType
    old_status: str | None
    new_status: str
    changed_by_user_id: str | None = None
    comment: str | None = None
    jira_link: str | None = None


@dataclass(frozen=True)
class StatusChange:
    """Requested status update for one platform.

    None means "leave unchanged". For jira_link an empty string clears the link.
    status_jira_link and comment annotate the history rows only.
    """

    implementation_status: ImplementationStatus | None = None
    validation_status: ValidationStatus | None = None
    jira_link: str | None = None
    comment: str | None = None
    status_jira_link: str | None = None
    version_number: int | None = None


@dataclass(frozen=True)
class PlatformStatusWithHistory:
    status: PlatformStatusResult
    history: list[StatusHistoryResult] = field(default_factory=list)

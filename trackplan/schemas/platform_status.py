"""Platform status and status history API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from trackplan.application.dtos.platform_status import (
    PlatformStatusWithHistory,
    StatusChange,
)
from trackplan.domain.enums import (
    ImplementationStatus,
    Platform,
    StatusType,
    ValidationStatus,
)


class StatusHistoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    status_type: StatusType
    old_status: str | None = None
    new_status: str
    changed_by_user_id: str | None = None
    comment: str | None = None
    jira_link: str | None = None
    created_at: datetime


class PlatformStatusResponse(BaseModel):
    """Status of one platform for one event version, with its history (newest first)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    event_id: str
    version_number: int
    platform: Platform
    jira_link: str | None = None
    implementation_status: ImplementationStatus
    validation_status: ValidationStatus
    created_at: datetime
    updated_at: datetime
    history: list[StatusHistoryResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, item: PlatformStatusWithHistory) -> "PlatformStatusResponse":
        s = item.status
        return cls(
            id=s.id,
            event_id=s.event_id,
            version_number=s.version_number,
            platform=s.platform,
            jira_link=s.jira_link,
            implementation_status=s.implementation_status,
            validation_status=s.validation_status,
            created_at=s.created_at,
            updated_at=s.updated_at,
            history=[StatusHistoryResponse.model_validate(h) for h in item.history],
        )


class PlatformStatusUpdateRequest(BaseModel):
    """Status change for one platform. Omitted fields are left unchanged.

    jira_link updates the status itself ("" clears it); comment and
    status_jira_link annotate the history entries this change creates.
    """

    implementation_status: ImplementationStatus | None = None
    validation_status: ValidationStatus | None = None
    jira_link: str | None = None
    comment: str | None = None
    status_jira_link: str | None = None
    version_number: int | None = Field(None, ge=1)

    def to_change(self) -> StatusChange:
        return StatusChange(**self.model_dump())


class AddPlatformRequest(BaseModel):
    platform: Platform

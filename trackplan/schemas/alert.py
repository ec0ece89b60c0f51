"""Drop alert and alert settings API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from trackplan.application.dtos.alert import AlertSettingsResult, AlertSettingsUpdate
from trackplan.domain.enums import Platform


class AlertResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    event_id: str | None = None
    platform: Platform
    event_category: str
    event_action: str
    yesterday_count: int
    day_before_count: int
    drop_percent: int
    checked_at: datetime
    is_resolved: bool


class AlertListResponse(BaseModel):
    items: list[AlertResponse]
    total: int
    limit: int
    offset: int


class AlertBulkDeleteRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1)


class AlertDeleteResponse(BaseModel):
    deleted: int


class AlertCheckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    checked: int
    alerts_created: int
    errors: int
    skipped_reason: str | None = None
    alerts: list[AlertResponse] = Field(default_factory=list)


class AlertSettingsRequest(BaseModel):
    """Alert settings. Unset Matomo fields fall back to the environment."""

    matomo_url: str | None = None
    matomo_token: str | None = None
    matomo_site_ids: str | None = Field(
        None, description="platform:site_id pairs, e.g. web:1,ios:2,android:3"
    )
    drop_threshold: int = Field(30, ge=0, le=100)
    max_concurrency: int = Field(5, ge=1, le=50)
    is_enabled: bool = True

    def to_update(self) -> AlertSettingsUpdate:
        return AlertSettingsUpdate(**self.model_dump())


class AlertSettingsResponse(BaseModel):
    """Effective settings. The token itself is never returned."""

    matomo_url: str | None = None
    matomo_token_set: bool
    matomo_site_ids: str | None = None
    drop_threshold: int
    max_concurrency: int
    is_enabled: bool

    @classmethod
    def from_result(cls, s: AlertSettingsResult) -> "AlertSettingsResponse":
        return cls(
            matomo_url=s.matomo_url,
            matomo_token_set=bool(s.matomo_token),
            matomo_site_ids=s.matomo_site_ids,
            drop_threshold=s.drop_threshold,
            max_concurrency=s.max_concurrency,
            is_enabled=s.is_enabled,
        )

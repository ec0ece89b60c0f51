"""DTOs for drop alerts and alert settings (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from trackplan.domain.enums import Platform


@dataclass(frozen=True)
class AlertResult:
    id: str
    event_id: str | None
    platform: Platform
    event_category: str
    event_action: str
    yesterday_count: int
    day_before_count: int
    drop_percent: int
    checked_at: datetime
    is_resolved: bool


@dataclass(frozen=True)
class AlertToCreate:
    event_id: str
    platform: Platform
    event_category: str
    event_action: str
    yesterday_count: int
    day_before_count: int
    drop_percent: int


@dataclass(frozen=True)
class AlertPage:
    items: list[AlertResult]
    total: int


@dataclass(frozen=True)
class AlertSettingsResult:
    """Stored settings row. Null Matomo fields mean "use environment value"."""

    matomo_url: str | None
    matomo_token: str | None
    matomo_site_ids: str | None
    drop_threshold: int
    max_concurrency: int
    is_enabled: bool


@dataclass(frozen=True)
class AlertSettingsUpdate:
    matomo_url: str | None = None
    matomo_token: str | None = None
    matomo_site_ids: str | None = None
    drop_threshold: int = 30
    max_concurrency: int = 5
    is_enabled: bool = True


@dataclass(frozen=True)
class EffectiveAlertSettings:
    """Stored settings merged with environment defaults; used by the drop check."""

    matomo_url: str | None
    matomo_token: str | None
    site_ids: dict[Platform, int]
    drop_threshold: int
    max_concurrency: int
    is_enabled: bool

    @property
    def analytics_configured(self) -> bool:
        return bool(self.matomo_url and self.matomo_token)


@dataclass(frozen=True)
class AlertCheckSummary:
    """Outcome of one drop check run."""

    checked: int = 0
    alerts_created: int = 0
    errors: int = 0
    skipped_reason: str | None = None
    alerts: list[AlertResult] = field(default_factory=list)

"""Alert and AlertSettings ORM models for traffic drop detection."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from trackplan.infrastructure.persistence.database import Base
from trackplan.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from trackplan.shared.utils.datetime import utc_now


class Alert(CuidMixin, Base):
    """Detected drop for one event on one platform. Table: alert.

    event_id is nulled when the event is deleted; category/action are
    copied so the alert stays readable.
    """

    __tablename__ = "alert"

    event_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("event.id", ondelete="SET NULL"), nullable=True, index=True
    )
    platform: Mapped[str] = mapped_column(String(20), nullable=False)
    event_category: Mapped[str] = mapped_column(String(255), nullable=False)
    event_action: Mapped[str] = mapped_column(String(255), nullable=False)
    yesterday_count: Mapped[int] = mapped_column(Integer, nullable=False)
    day_before_count: Mapped[int] = mapped_column(Integer, nullable=False)
    drop_percent: Mapped[int] = mapped_column(Integer, nullable=False)
    checked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, index=True
    )
    is_resolved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class AlertSettings(CuidMixin, TimestampMixin, Base):
    """Singleton row with drop-check configuration. Table: alert_settings.

    Null Matomo fields fall back to environment settings.
    """

    __tablename__ = "alert_settings"

    matomo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    matomo_token: Mapped[str | None] = mapped_column(String(255), nullable=True)
    matomo_site_ids: Mapped[str | None] = mapped_column(String(255), nullable=True)
    drop_threshold: Mapped[int] = mapped_column(Integer, nullable=False, default=30)
    max_concurrency: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

"""EventPlatformStatus ORM model: rollout state of one event version on one platform."""

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from trackplan.domain.enums import ImplementationStatus, ValidationStatus
from trackplan.infrastructure.persistence.database import Base
from trackplan.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class EventPlatformStatus(CuidMixin, TimestampMixin, Base):
    """Per-version, per-platform status. Table: event_platform_status.

    Unique (event_id, version_number, platform).
    """

    __tablename__ = "event_platform_status"

    event_id: Mapped[str] = mapped_column(
        String, ForeignKey("event.id"), nullable=False, index=True
    )
    version_number: Mapped[int] = mapped_column(Integer, nullable=False)
    platform: Mapped[str] = mapped_column(String(20), nullable=False)
    jira_link: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    implementation_status: Mapped[str] = mapped_column(
        String(30), nullable=False, default=ImplementationStatus.DRAFT.value
    )
    validation_status: Mapped[str] = mapped_column(
        String(30), nullable=False, default=ValidationStatus.PENDING.value
    )

    __table_args__ = (
        UniqueConstraint(
            "event_id",
            "version_number",
            "platform",
            name="uq_event_platform_status_event_version_platform",
        ),
    )

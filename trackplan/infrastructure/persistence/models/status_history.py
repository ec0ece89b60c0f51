"""StatusHistory ORM model: append-only log of status transitions."""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trackplan.infrastructure.persistence.database import Base
from trackplan.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class StatusHistory(CuidMixin, CreatedAtMixin, Base):
    """One implementation or validation transition. Table: status_history."""

    __tablename__ = "status_history"

    event_platform_status_id: Mapped[str] = mapped_column(
        String, ForeignKey("event_platform_status.id"), nullable=False, index=True
    )
    status_type: Mapped[str] = mapped_column(String(20), nullable=False)
    old_status: Mapped[str | None] = mapped_column(String(30), nullable=True)
    new_status: Mapped[str] = mapped_column(String(30), nullable=False)
    changed_by_user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("user.id", ondelete="SET NULL"), nullable=True
    )
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    jira_link: Mapped[str | None] = mapped_column(String(1024), nullable=True)

"""Event ORM model: the live, mutable definition of one tracked analytics event.

current_version points at the latest EventVersion row for the event.
Dependent rows (versions, statuses, history, comments) are removed by the
application in dependency order, not by ON DELETE CASCADE.
"""

from typing import Any

from sqlalchemy import JSON, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trackplan.infrastructure.persistence.database import Base
from trackplan.infrastructure.persistence.models.category import Category
from trackplan.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Event(CuidMixin, TimestampMixin, Base):
    """Tracked event. Table: event."""

    __tablename__ = "event"

    category_id: Mapped[str] = mapped_column(
        String, ForeignKey("category.id"), nullable=False, index=True
    )
    block: Mapped[str | None] = mapped_column(String(255), nullable=True)
    action: Mapped[str] = mapped_column(String(255), nullable=False)
    action_description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    value_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    author_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    platforms: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    properties: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    current_version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    category: Mapped[Category] = relationship(lazy="joined")

    __table_args__ = (Index("ix_event_category_action", "category_id", "action"),)

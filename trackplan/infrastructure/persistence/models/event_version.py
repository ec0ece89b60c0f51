"""EventVersion ORM model: snapshot of an event at one version number.

Identity fields (category, action, name, value_description, properties) are
never rewritten after insert; non-versioned fields of the current version may
be updated in place.
"""

from typing import Any

from sqlalchemy import JSON, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trackplan.infrastructure.persistence.database import Base
from trackplan.infrastructure.persistence.models.category import Category
from trackplan.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class EventVersion(CuidMixin, CreatedAtMixin, Base):
    """Event version snapshot. Table: event_version. Unique (event_id, version)."""

    __tablename__ = "event_version"

    event_id: Mapped[str] = mapped_column(
        String, ForeignKey("event.id"), nullable=False, index=True
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    category_id: Mapped[str] = mapped_column(
        String, ForeignKey("category.id"), nullable=False
    )
    block: Mapped[str | None] = mapped_column(String(255), nullable=True)
    action: Mapped[str] = mapped_column(String(255), nullable=False)
    action_description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    value_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("user.id", ondelete="SET NULL"), nullable=True
    )
    platforms: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    properties: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    change_description: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("user.id", ondelete="SET NULL"), nullable=True
    )

    category: Mapped[Category] = relationship(lazy="joined")

    __table_args__ = (
        UniqueConstraint("event_id", "version", name="uq_event_version_event_version"),
    )

"""Comment ORM model (per-event discussion thread, not versioned)."""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trackplan.infrastructure.persistence.database import Base
from trackplan.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class Comment(CuidMixin, CreatedAtMixin, Base):
    """Event comment. Table: comment."""

    __tablename__ = "comment"

    event_id: Mapped[str] = mapped_column(
        String, ForeignKey("event.id"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)

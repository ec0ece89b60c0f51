"""Category ORM model. Free-text grouping for events; created lazily by name."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trackplan.infrastructure.persistence.database import Base
from trackplan.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class Category(CuidMixin, CreatedAtMixin, Base):
    """Event category. Table: category. Unique name."""

    __tablename__ = "category"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

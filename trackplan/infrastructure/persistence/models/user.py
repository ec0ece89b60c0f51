"""User ORM model. Single role per user; permissions come from the role map."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from trackplan.domain.enums import UserRole
from trackplan.infrastructure.persistence.database import Base
from trackplan.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class User(CuidMixin, TimestampMixin, Base):
    """Dashboard user. Table: user. Unique username."""

    __tablename__ = "user"

    username: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.VIEWER.value
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

"""User repository. Returns UserResult; the password hash is only exposed for login."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trackplan.application.dtos.user import UserResult
from trackplan.domain.enums import UserRole
from trackplan.infrastructure.persistence.models.user import User
from trackplan.infrastructure.persistence.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def _user_to_result(u: User) -> UserResult:
    return UserResult(
        id=u.id,
        username=u.username,
        email=u.email,
        name=u.name,
        role=UserRole(u.role),
        is_active=u.is_active,
    )


class UserRepository(BaseRepository[User]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def _on_after_create(self, obj: User) -> None:
        logger.info("User created: %s (role=%s)", obj.username, obj.role)

    async def _get_entity_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: str) -> UserResult | None:
        row = await self.get_entity_by_id(user_id)
        return _user_to_result(row) if row else None

    async def get_by_username(self, username: str) -> UserResult | None:
        row = await self._get_entity_by_username(username)
        return _user_to_result(row) if row else None

    async def get_password_hash(self, username: str) -> str | None:
        row = await self._get_entity_by_username(username)
        return row.hashed_password if row else None

    async def create_user(
        self,
        username: str,
        hashed_password: str,
        role: str,
        email: str | None = None,
        name: str | None = None,
    ) -> UserResult:
        created = await self.create(
            User(
                username=username,
                hashed_password=hashed_password,
                role=role,
                email=email,
                name=name,
                is_active=True,
            )
        )
        return _user_to_result(created)

    async def list_users(self, skip: int = 0, limit: int = 100) -> list[UserResult]:
        result = await self.db.execute(
            select(User).order_by(User.username).offset(skip).limit(limit)
        )
        return [_user_to_result(u) for u in result.scalars().all()]

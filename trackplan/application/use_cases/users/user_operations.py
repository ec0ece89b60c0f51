"""User operations: login, lookup, and admin user management."""

import asyncio
import logging

from trackplan.application.dtos.user import UserCreate, UserResult
from trackplan.application.interfaces.repositories import IUserRepository
from trackplan.application.interfaces.services import IPasswordHasher, ITokenIssuer
from trackplan.domain.exceptions import (
    AuthenticationException,
    ResourceNotFoundException,
    UserAlreadyExistsException,
    ValidationException,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class UserService:
    """Authenticate users and manage accounts."""

    def __init__(
        self,
        user_repo: IUserRepository,
        hasher: IPasswordHasher,
        token_issuer: ITokenIssuer | None = None,
    ) -> None:
        self.user_repo = user_repo
        self.hasher = hasher
        self.token_issuer = token_issuer

    async def authenticate(self, username: str, password: str) -> UserResult:
        """Return the active user for valid credentials.

        Raises:
            AuthenticationException: unknown user, wrong password or inactive account.
        """
        hashed = await self.user_repo.get_password_hash(username)
        # bcrypt is CPU-bound; keep it off the event loop
        if hashed is None or not await asyncio.to_thread(
            self.hasher.verify, password, hashed
        ):
            raise AuthenticationException("Invalid credentials")
        user = await self.user_repo.get_by_username(username)
        if user is None or not user.is_active:
            raise AuthenticationException("Invalid credentials")
        return user

    async def login(self, username: str, password: str) -> str:
        """Authenticate and return a bearer access token."""
        if self.token_issuer is None:
            raise RuntimeError("UserService.login requires a token issuer")
        user = await self.authenticate(username, password)
        logger.info("User %s logged in", user.username)
        return self.token_issuer.issue(user.id, user.role.value)

    async def get_user(self, user_id: str) -> UserResult:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return user

    async def list_users(self, skip: int = 0, limit: int = 100) -> list[UserResult]:
        return await self.user_repo.list_users(skip=skip, limit=limit)

    async def create_user(self, data: UserCreate) -> UserResult:
        """Create a user with a hashed password.

        Raises:
            ValidationException: blank username or short password.
            UserAlreadyExistsException: username taken.
        """
        username = (data.username or "").strip()
        if not username:
            raise ValidationException("Username must not be empty", field="username")
        if len(data.password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationException(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
            )
        if await self.user_repo.get_by_username(username) is not None:
            raise UserAlreadyExistsException(username)
        hashed = await asyncio.to_thread(self.hasher.hash, data.password)
        return await self.user_repo.create_user(
            username=username,
            hashed_password=hashed,
            role=data.role.value,
            email=data.email,
            name=data.name,
        )

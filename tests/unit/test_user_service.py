"""UserService tests with a mocked repository and a fake hasher."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from trackplan.application.dtos.user import UserCreate, UserResult
from trackplan.application.use_cases.users import UserService
from trackplan.domain.enums import UserRole
from trackplan.domain.exceptions import (
    AuthenticationException,
    UserAlreadyExistsException,
    ValidationException,
)
from trackplan.infrastructure.security import BcryptPasswordHasher


class PlainHasher:
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


def _user(active: bool = True) -> UserResult:
    return UserResult(
        id="u1",
        username="alice",
        email=None,
        name="Alice",
        role=UserRole.ANALYST,
        is_active=active,
    )


@pytest.fixture
def user_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_password_hash = AsyncMock(return_value="hashed:secret-pass")
    repo.get_by_username = AsyncMock(return_value=_user())
    repo.create_user = AsyncMock(return_value=_user())
    return repo


async def test_login_issues_token(user_repo) -> None:
    issuer = MagicMock()
    issuer.issue = MagicMock(return_value="jwt")
    svc = UserService(user_repo, PlainHasher(), issuer)

    assert await svc.login("alice", "secret-pass") == "jwt"
    issuer.issue.assert_called_once_with("u1", "analyst")


@pytest.mark.parametrize("password", ["wrong", ""])
async def test_wrong_password_rejected(user_repo, password: str) -> None:
    svc = UserService(user_repo, PlainHasher())
    with pytest.raises(AuthenticationException):
        await svc.authenticate("alice", password)


async def test_unknown_user_rejected(user_repo) -> None:
    user_repo.get_password_hash = AsyncMock(return_value=None)
    svc = UserService(user_repo, PlainHasher())
    with pytest.raises(AuthenticationException):
        await svc.authenticate("nobody", "secret-pass")


async def test_inactive_user_rejected(user_repo) -> None:
    user_repo.get_by_username = AsyncMock(return_value=_user(active=False))
    svc = UserService(user_repo, PlainHasher())
    with pytest.raises(AuthenticationException):
        await svc.authenticate("alice", "secret-pass")


async def test_create_user_hashes_password(user_repo) -> None:
    user_repo.get_by_username = AsyncMock(return_value=None)
    svc = UserService(user_repo, PlainHasher())

    await svc.create_user(UserCreate(username=" bob ", password="long-enough", role=UserRole.DEVELOPER))

    kwargs = user_repo.create_user.call_args.kwargs
    assert kwargs["username"] == "bob"
    assert kwargs["hashed_password"] == "hashed:long-enough"
    assert kwargs["role"] == "developer"


async def test_create_duplicate_user(user_repo) -> None:
    svc = UserService(user_repo, PlainHasher())
    with pytest.raises(UserAlreadyExistsException):
        await svc.create_user(UserCreate(username="alice", password="long-enough"))


@pytest.mark.parametrize("username, password", [("  ", "long-enough"), ("bob", "short")])
async def test_create_user_validation(user_repo, username: str, password: str) -> None:
    svc = UserService(user_repo, PlainHasher())
    with pytest.raises(ValidationException):
        await svc.create_user(UserCreate(username=username, password=password))
    user_repo.create_user.assert_not_awaited()


def test_bcrypt_hasher_round_trip_long_password() -> None:
    hasher = BcryptPasswordHasher()
    long_password = "x" * 100
    hashed = hasher.hash(long_password)
    assert hasher.verify(long_password, hashed)
    assert not hasher.verify("x" * 99, hashed)
    assert not hasher.verify(long_password, "not-a-bcrypt-hash")

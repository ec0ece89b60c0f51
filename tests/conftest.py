"""Pytest configuration and fixtures for trackplan.

Database fixtures run against in-memory SQLite (aiosqlite) with the full
schema created from Base.metadata, one fresh database per test. HTTP tests
use trackplan.main:app with the session dependencies overridden so every
request shares the test session.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-trackplan-tests-0123456789")
os.environ.setdefault("ALERT_CHECK_INTERVAL_SECONDS", "0")
os.environ.setdefault("REDIS_ENABLED", "false")

from collections.abc import AsyncIterator  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from trackplan.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from trackplan.application.dtos.user import UserResult  # noqa: E402
from trackplan.core.limiter import limiter  # noqa: E402
from trackplan.domain.enums import UserRole  # noqa: E402
from trackplan.infrastructure.cache import MemoryAnalyticsCache  # noqa: E402
from trackplan.infrastructure.persistence import models  # noqa: E402,F401
from trackplan.infrastructure.persistence.database import (  # noqa: E402
    Base,
    get_db,
    get_db_transactional,
)
from trackplan.infrastructure.persistence.repositories import (  # noqa: E402
    UserRepository,
)
from trackplan.infrastructure.security import (  # noqa: E402
    create_access_token,
    get_password_hash,
)
from trackplan.main import app  # noqa: E402

TEST_PASSWORD = "correct-horse-battery"

limiter.enabled = False


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """In-memory SQLite engine with the schema created.

    pysqlite's implicit transaction handling breaks SAVEPOINT; the driver is
    put in autocommit mode and BEGIN is emitted explicitly.
    """
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(test_engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, _connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(test_engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Database session for repository/integration tests."""
    factory = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with factory() as session:
        yield session


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI), sharing db_session.

    Lifespan does not run under ASGITransport; the state it would set up is
    assigned here.
    """

    async def _get_db() -> AsyncIterator[AsyncSession]:
        yield db_session

    async def _get_db_transactional() -> AsyncIterator[AsyncSession]:
        try:
            yield db_session
        except Exception:
            await db_session.rollback()
            raise
        else:
            await db_session.commit()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_db_transactional] = _get_db_transactional
    app.state.analytics_cache = MemoryAnalyticsCache(ttl_seconds=60)
    app.state.http_client = httpx.AsyncClient()
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        await app.state.http_client.aclose()
        app.dependency_overrides.clear()


async def _create_user(
    session: AsyncSession,
    username: str,
    role: UserRole = UserRole.VIEWER,
    name: str | None = None,
) -> UserResult:
    """Insert a user with TEST_PASSWORD and commit."""
    user = await UserRepository(session).create_user(
        username=username,
        hashed_password=get_password_hash(TEST_PASSWORD),
        role=role.value,
        name=name,
    )
    await session.commit()
    return user


def _headers_for(user: UserResult) -> dict[str, str]:
    token = create_access_token(
        {"sub": user.id, "role": user.role.value}, settings=get_settings()
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> UserResult:
    return await _create_user(db_session, "admin", UserRole.ADMIN, name="Ada Admin")


@pytest.fixture
async def admin_headers(admin_user: UserResult) -> dict[str, str]:
    return _headers_for(admin_user)


@pytest.fixture
async def viewer_headers(db_session: AsyncSession) -> dict[str, str]:
    viewer = await _create_user(db_session, "viewer", UserRole.VIEWER)
    return _headers_for(viewer)


@pytest.fixture
async def developer_headers(db_session: AsyncSession) -> dict[str, str]:
    developer = await _create_user(db_session, "dev", UserRole.DEVELOPER)
    return _headers_for(developer)


@pytest.fixture
def make_user(db_session: AsyncSession):
    """Factory: await make_user("name", UserRole.X) -> committed UserResult."""

    async def factory(
        username: str, role: UserRole = UserRole.VIEWER, name: str | None = None
    ) -> UserResult:
        return await _create_user(db_session, username, role, name)

    return factory


@pytest.fixture
def headers_for():
    return _headers_for

"""Service test fixtures — async DB, handlers wired to SQL repositories, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db, get_clock and get_identity_validator overridden for route tests
    - db_manager patched for the readiness probe that bypasses get_db

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for these tests
      (PostgreSQL-specific features not exercised here)
    - Handlers built over test_db so assertions can read the same store
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import accountability.infrastructure.database as db_module
from accountability.api.deps import get_clock, get_identity_validator
from accountability.db.base import Base
from accountability.infrastructure.database import get_db, DatabaseSessionManager
from accountability.infrastructure.sql_store import (
    SqlGoalRepository, SqlUnitOfWork, SqlUserRepository,
)
from accountability.main import app
from accountability.models.user import User
from accountability.services.handle_goals import GoalHandlers
from accountability.services.handle_login import LoginHandlers
from accountability.services.handle_streak import StreakHandlers

from tests.fakes import FakeIdentityValidator, FrozenClock


@pytest.fixture
async def test_engine():
    import accountability.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def identity():
    return FakeIdentityValidator(known={"https://github.com/alice", "octocat"})


@pytest.fixture
def goal_handlers(test_db, clock):
    return GoalHandlers(
        SqlUserRepository(test_db), SqlGoalRepository(test_db),
        SqlUnitOfWork(test_db), clock,
    )


@pytest.fixture
def streak_handlers(test_db, clock):
    return StreakHandlers(
        SqlUserRepository(test_db), SqlGoalRepository(test_db),
        SqlUnitOfWork(test_db), clock,
    )


@pytest.fixture
def login_handlers(test_db, identity):
    return LoginHandlers(
        SqlUserRepository(test_db), SqlUnitOfWork(test_db), identity,
    )


@pytest.fixture
async def seed_user(test_db):
    """Factory: insert a user directly into the test DB."""
    async def _seed(name: str = "alice", streak: int = 0, cycle_start=None) -> User:
        user = User(
            name=name, profile_ref=f"https://github.com/{name}",
            streak=streak, cycle_start=cycle_start,
        )
        test_db.add(user)
        await test_db.commit()
        await test_db.refresh(user)
        return user
    return _seed


@pytest.fixture
async def client(test_engine, test_session_factory, clock, identity):
    """FastAPI test client with DB, clock and identity dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_identity_validator] = lambda: identity

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager

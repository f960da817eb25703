"""SQL Store — SQLAlchemy implementations of the persistence protocols.

Invariants:
    - Repositories stage changes with flush(); only SqlUnitOfWork.commit() commits
    - Every SQLAlchemy failure becomes StoreUnavailableError and rolls the session back,
      so a failed operation leaves no partial state
    - Leaderboard order: streak descending, then name ascending
    - A duplicate name on user creation is NameTakenError, not StoreUnavailableError

Design Decisions:
    - One AsyncSession shared by both repositories and the unit of work of a request:
      the two-record mutations (cycle open + goal insert, streak + purge) commit together
    - Bulk delete via a DELETE statement rather than loading every goal
    - No row locking: concurrent read-modify-write on the same row is last-write-wins
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from accountability.core.domain_types import GoalId, UserId
from accountability.core.errors import NameTakenError, StoreUnavailableError
from accountability.models.goal import Goal
from accountability.models.user import User

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _store_errors(db: AsyncSession, operation: str) -> AsyncIterator[None]:
    """Map SQLAlchemy failures to StoreUnavailableError after rolling back."""
    try:
        yield
    except IntegrityError as e:
        await db.rollback()
        logger.error(f"Store integrity error during {operation}: {e}")
        raise StoreUnavailableError("Integrity constraint violated", operation)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Store error during {operation}: {e}")
        raise StoreUnavailableError("Database operation failed", operation)


class SqlUserRepository:
    """User persistence on an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: UserId) -> User | None:
        async with _store_errors(self.db, "get_user"):
            return await self.db.get(User, user_id)

    async def find_by_name(self, name: str) -> User | None:
        async with _store_errors(self.db, "find_user_by_name"):
            result = await self.db.execute(select(User).where(User.name == name))
            return result.scalar_one_or_none()

    async def create(self, name: str, profile_ref: str | None) -> User:
        """Stage a new user. Raises NameTakenError if the name already exists."""
        user = User(name=name, profile_ref=profile_ref, streak=0, cycle_start=None)
        async with _store_errors(self.db, "create_user"):
            self.db.add(user)
            try:
                await self.db.flush()
            except IntegrityError:
                await self.db.rollback()
                logger.warning(f"Registration conflict on name {name!r}")
                raise NameTakenError(name)
        return user

    async def save(self, user: User) -> None:
        async with _store_errors(self.db, "save_user"):
            self.db.add(user)
            await self.db.flush()

    async def list_by_streak_desc(self) -> Sequence[User]:
        async with _store_errors(self.db, "list_users"):
            result = await self.db.execute(
                select(User).order_by(User.streak.desc(), User.name.asc()),
            )
            return result.scalars().all()


class SqlGoalRepository:
    """Goal persistence on an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, goal_id: GoalId) -> Goal | None:
        async with _store_errors(self.db, "get_goal"):
            return await self.db.get(Goal, goal_id)

    async def find_by_user(self, user_id: UserId) -> Sequence[Goal]:
        async with _store_errors(self.db, "find_goals_by_user"):
            result = await self.db.execute(
                select(Goal).where(Goal.user_id == user_id),
            )
            return result.scalars().all()

    async def find_recent(
        self, since: datetime, user_id: UserId | None = None,
    ) -> Sequence[Goal]:
        query = select(Goal).where(Goal.created_at >= since)
        if user_id is not None:
            query = query.where(Goal.user_id == user_id)
        query = query.order_by(Goal.created_at.desc())
        async with _store_errors(self.db, "find_recent_goals"):
            result = await self.db.execute(query)
            return result.scalars().all()

    async def create(
        self,
        owner_id: UserId,
        owner_name: str,
        text: str,
        allocated_minutes: int,
        created_at: datetime,
    ) -> Goal:
        goal = Goal(
            user_id=owner_id,
            user_name=owner_name,
            text=text,
            allocated_minutes=allocated_minutes,
            completed=False,
            created_at=created_at,
        )
        async with _store_errors(self.db, "create_goal"):
            self.db.add(goal)
            await self.db.flush()
        return goal

    async def save(self, goal: Goal) -> None:
        async with _store_errors(self.db, "save_goal"):
            self.db.add(goal)
            await self.db.flush()

    async def delete(self, goal_id: GoalId) -> None:
        async with _store_errors(self.db, "delete_goal"):
            await self.db.execute(delete(Goal).where(Goal.id == goal_id))

    async def delete_by_user(self, user_id: UserId) -> int:
        """Hard-delete every goal of user_id. Returns the number of rows removed."""
        async with _store_errors(self.db, "delete_goals_by_user"):
            result = await self.db.execute(
                delete(Goal).where(Goal.user_id == user_id),
            )
            return result.rowcount or 0


class SqlUnitOfWork:
    """Commits or rolls back everything staged on the request session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def commit(self) -> None:
        async with _store_errors(self.db, "commit"):
            await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()

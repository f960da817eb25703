"""Dependency Wiring — builds per-request handlers from the request's DB session.

Invariants:
    - One AsyncSession per request, shared by repositories and unit of work
    - Clock and identity validator are dependencies so tests can override them

Design Decisions:
    - Identity validator lives on app.state: one pooled httpx client per process,
      created and closed by the lifespan
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from accountability.core.repository_protocols import Clock, IdentityValidator
from accountability.infrastructure.clock import SystemClock
from accountability.infrastructure.database import get_db
from accountability.infrastructure.sql_store import (
    SqlGoalRepository, SqlUnitOfWork, SqlUserRepository,
)
from accountability.services.handle_goals import GoalHandlers
from accountability.services.handle_login import LoginHandlers
from accountability.services.handle_streak import StreakHandlers

_system_clock = SystemClock()


def get_clock() -> Clock:
    return _system_clock


def get_identity_validator(request: Request) -> IdentityValidator:
    validator = getattr(request.app.state, "identity_validator", None)
    if validator is None:
        raise RuntimeError("Identity validator not initialized")
    return validator


def get_login_handlers(
    db: AsyncSession = Depends(get_db),
    identity: IdentityValidator = Depends(get_identity_validator),
) -> LoginHandlers:
    return LoginHandlers(SqlUserRepository(db), SqlUnitOfWork(db), identity)


def get_goal_handlers(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> GoalHandlers:
    return GoalHandlers(
        SqlUserRepository(db), SqlGoalRepository(db), SqlUnitOfWork(db), clock,
    )


def get_streak_handlers(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> StreakHandlers:
    return StreakHandlers(
        SqlUserRepository(db), SqlGoalRepository(db), SqlUnitOfWork(db), clock,
    )

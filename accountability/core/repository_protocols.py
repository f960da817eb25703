"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Repositories only stage changes; UnitOfWork.commit() is the single write point
      of an operation, so two-record mutations land together or not at all

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these objects are never async themselves;
      the shell orchestrates the async calls around the pure logic
"""

from datetime import datetime
from typing import Protocol, Sequence
from uuid import UUID

from accountability.core.domain_types import UserId, GoalId


class UserLike(Protocol):
    """Structural contract for user records handled by the cycle engine."""
    id: UUID
    name: str
    profile_ref: str | None
    streak: int
    cycle_start: datetime | None


class GoalLike(Protocol):
    """Structural contract for goal records handled by evaluator and gate."""
    id: UUID
    user_id: UUID
    text: str
    allocated_minutes: int
    completed: bool
    created_at: datetime


class Clock(Protocol):
    """Supplies the current UTC instant."""
    def now(self) -> datetime: ...


class IdentityValidator(Protocol):
    """External profile check, used only during first-time registration."""
    async def verify_profile(self, reference: str) -> bool: ...


class UserRepository(Protocol):
    """Contract for user persistence: implemented by shell."""
    async def get(self, user_id: UserId) -> UserLike | None: ...
    async def find_by_name(self, name: str) -> UserLike | None: ...
    async def create(self, name: str, profile_ref: str | None) -> UserLike: ...  # NameTakenError on duplicate
    async def save(self, user: UserLike) -> None: ...
    async def list_by_streak_desc(self) -> Sequence[UserLike]: ...


class GoalRepository(Protocol):
    """Contract for goal persistence: implemented by shell."""
    async def get(self, goal_id: GoalId) -> GoalLike | None: ...
    async def find_by_user(self, user_id: UserId) -> Sequence[GoalLike]: ...
    async def find_recent(
        self, since: datetime, user_id: UserId | None = None,
    ) -> Sequence[GoalLike]: ...
    async def create(
        self,
        owner_id: UserId,
        owner_name: str,
        text: str,
        allocated_minutes: int,
        created_at: datetime,
    ) -> GoalLike: ...
    async def save(self, goal: GoalLike) -> None: ...
    async def delete(self, goal_id: GoalId) -> None: ...
    async def delete_by_user(self, user_id: UserId) -> int: ...


class UnitOfWork(Protocol):
    """Atomic unit spanning every repository call of one operation."""
    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...

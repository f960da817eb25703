"""Streak Handlers — evaluate a user's cycle, report its countdown, list the leaderboard.

Invariants:
    - settle_cycle is the ONLY path that advances a streak or clears cycle_start
    - It reads the user's full live goal set, never the 3-day listing window
    - Streak increment, cycle reset and goal purge are staged together and
      committed by the caller's single commit
    - Evaluating an unsatisfied or empty cycle changes nothing

Design Decisions:
    - settle_cycle is module-level so the toggle handler can run it inside its
      own atomic unit instead of committing twice
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from accountability.core.completion_evaluator import advance_streak, is_cycle_satisfied
from accountability.core.cycle_engine import CycleStatus, cycle_status
from accountability.core.domain_types import UserId
from accountability.core.errors import ErrorContext, ResourceNotFoundError
from accountability.core.repository_protocols import (
    Clock, GoalRepository, UnitOfWork, UserLike, UserRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class StreakOutcome:
    user: UserLike
    advanced: bool


async def settle_cycle(
    users: UserRepository, goals: GoalRepository, user: UserLike,
) -> bool:
    """Advance the streak and purge goals if every goal is complete. No commit."""
    live_goals = await goals.find_by_user(UserId(user.id))
    if not is_cycle_satisfied(live_goals):
        return False

    streak = advance_streak(user)
    purged = await goals.delete_by_user(UserId(user.id))
    await users.save(user)
    logger.info(
        f"Cycle satisfied for {user.name!r}: streak {streak}, {purged} goal(s) purged",
        extra={"user_id": user.id, "streak": streak},
    )
    return True


async def load_user_or_404(users: UserRepository, user_id: UserId) -> UserLike:
    user = await users.get(user_id)
    if user is None:
        raise ResourceNotFoundError(
            "User", str(user_id), ErrorContext(user_id=str(user_id)),
        )
    return user


class StreakHandlers:
    """Streak evaluation and cycle queries."""

    def __init__(
        self,
        users: UserRepository,
        goals: GoalRepository,
        uow: UnitOfWork,
        clock: Clock,
    ):
        self.users = users
        self.goals = goals
        self.uow = uow
        self.clock = clock

    async def evaluate_streak(self, user_id: UserId) -> StreakOutcome:
        user = await load_user_or_404(self.users, user_id)
        advanced = await settle_cycle(self.users, self.goals, user)
        if advanced:
            await self.uow.commit()
        return StreakOutcome(user=user, advanced=advanced)

    async def get_user(self, user_id: UserId) -> UserLike:
        return await load_user_or_404(self.users, user_id)

    async def cycle_status(self, user_id: UserId) -> tuple[UserLike, CycleStatus]:
        user = await load_user_or_404(self.users, user_id)
        return user, cycle_status(user.cycle_start, self.clock.now())

    async def leaderboard(self) -> Sequence[UserLike]:
        return await self.users.list_by_streak_desc()

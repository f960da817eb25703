"""Goal Handlers — create, toggle, delete and list goals.

Invariants:
    - create_goal opens the owner's cycle (if none) and inserts the goal in one commit
    - toggle_goal flips the flag and settles the owner's cycle in one commit
    - delete_goal passes the deletion gate before anything is removed
    - list_recent_goals only filters; it never deletes old goals

Design Decisions:
    - The owner's display name is copied from the user record, not from the caller
    - Rule rejections are logged at WARNING and re-raised unchanged
"""

import logging
from dataclasses import dataclass
from typing import Sequence
from uuid import UUID

from accountability.core.completion_evaluator import toggle_completion
from accountability.core.cycle_engine import open_cycle_if_idle
from accountability.core.deletion_gate import check_deletion_allowed
from accountability.core.domain_types import GoalId, UserId
from accountability.core.errors import (
    AccountabilityError, ErrorContext, ResourceNotFoundError,
)
from accountability.core.repository_protocols import (
    Clock, GoalLike, GoalRepository, UnitOfWork, UserLike, UserRepository,
)
from accountability.core.time_windows import is_within_retention, retention_cutoff
from accountability.services.handle_streak import load_user_or_404, settle_cycle

logger = logging.getLogger(__name__)


@dataclass
class GoalCreation:
    goal: GoalLike
    user: UserLike
    cycle_opened: bool


@dataclass
class ToggleOutcome:
    goal: GoalLike
    user: UserLike | None
    streak_advanced: bool


class GoalHandlers:
    """Goal lifecycle operations."""

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

    async def create_goal(
        self, user_id: UserId, text: str, allocated_minutes: int,
    ) -> GoalCreation:
        user = await load_user_or_404(self.users, user_id)
        now = self.clock.now()

        opened = open_cycle_if_idle(user, now)
        if opened:
            await self.users.save(user)
        goal = await self.goals.create(
            UserId(user.id), user.name, text, allocated_minutes, now,
        )
        await self.uow.commit()

        if opened:
            logger.info(f"Cycle opened for {user.name!r}", extra={"user_id": user.id})
        return GoalCreation(goal=goal, user=user, cycle_opened=opened)

    async def toggle_goal(self, goal_id: GoalId) -> ToggleOutcome:
        goal = await self._load_goal_or_404(goal_id)
        toggle_completion(goal)
        await self.goals.save(goal)

        user = await self.users.get(UserId(goal.user_id))
        advanced = False
        if user is not None:
            advanced = await settle_cycle(self.users, self.goals, user)
        await self.uow.commit()
        return ToggleOutcome(goal=goal, user=user, streak_advanced=advanced)

    async def delete_goal(
        self, goal_id: GoalId, requester_id: UUID | None = None,
    ) -> None:
        goal = await self._load_goal_or_404(goal_id)
        try:
            check_deletion_allowed(goal, self.clock.now(), requester_id)
        except AccountabilityError as e:
            logger.warning(
                f"Goal deletion rejected: {e.message}",
                extra={"goal_id": goal_id, "error_code": e.code},
            )
            raise

        await self.goals.delete(GoalId(goal.id))
        await self.uow.commit()
        logger.info("Goal deleted", extra={"goal_id": goal_id})

    async def list_recent_goals(
        self, user_id: UserId | None = None,
    ) -> Sequence[GoalLike]:
        now = self.clock.now()
        goals = await self.goals.find_recent(retention_cutoff(now), user_id)
        return [g for g in goals if is_within_retention(g.created_at, now)]

    async def _load_goal_or_404(self, goal_id: GoalId) -> GoalLike:
        goal = await self.goals.get(goal_id)
        if goal is None:
            raise ResourceNotFoundError(
                "Goal", str(goal_id), ErrorContext(goal_id=str(goal_id)),
            )
        return goal

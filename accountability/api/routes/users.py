"""User Routes — leaderboard, user refresh, cycle countdown and streak evaluation.

Invariants:
    - /leaderboard registered before /{user_id} so it is never parsed as an id
    - Cycle status is computed per request; clients poll it for the countdown
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from accountability.api.deps import get_streak_handlers
from accountability.core.cycle_engine import format_countdown
from accountability.core.domain_types import UserId
from accountability.schemas.user import (
    CycleStatusResponse, StreakResponse, UserResponse,
)
from accountability.services.handle_streak import StreakHandlers

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/leaderboard", response_model=list[UserResponse])
async def leaderboard(handlers: StreakHandlers = Depends(get_streak_handlers)):
    """All users, highest streak first."""
    users = await handlers.leaderboard()
    return [UserResponse.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID, handlers: StreakHandlers = Depends(get_streak_handlers),
):
    user = await handlers.get_user(UserId(user_id))
    return UserResponse.model_validate(user)


@router.get("/{user_id}/cycle", response_model=CycleStatusResponse)
async def get_cycle_status(
    user_id: UUID, handlers: StreakHandlers = Depends(get_streak_handlers),
):
    """Current cycle state with remaining time."""
    user, status = await handlers.cycle_status(UserId(user_id))
    return CycleStatusResponse(
        user_id=user.id,
        state=status.state,
        cycle_start=status.cycle_start,
        ends_at=status.ends_at,
        remaining_seconds=status.remaining_seconds,
        countdown=format_countdown(status),
    )


@router.post("/{user_id}/streak", response_model=StreakResponse)
async def evaluate_streak(
    user_id: UUID, handlers: StreakHandlers = Depends(get_streak_handlers),
):
    """Advance the streak if every goal of the cycle is complete."""
    outcome = await handlers.evaluate_streak(UserId(user_id))
    return StreakResponse(
        user=UserResponse.model_validate(outcome.user),
        advanced=outcome.advanced,
    )

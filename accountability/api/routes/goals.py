"""Goal Routes — create, list, toggle and delete goals.

Invariants:
    - Toggling settles the owner's cycle in the same request
    - DELETE honors the 30-minute window; ?user_id= adds an ownership check
    - Listing returns goals of the trailing 3 days only, newest first
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from accountability.api.deps import get_goal_handlers
from accountability.core.domain_types import GoalId, UserId
from accountability.schemas.goal import (
    GoalCreate, GoalCreatedResponse, GoalResponse, ToggleResponse,
)
from accountability.schemas.user import UserResponse
from accountability.services.handle_goals import GoalHandlers

router = APIRouter(prefix="/api/v1/goals", tags=["goals"])


@router.post(
    "", response_model=GoalCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_goal(
    body: GoalCreate, handlers: GoalHandlers = Depends(get_goal_handlers),
):
    """Commit a goal; the first goal since the last reset opens a 24h cycle."""
    created = await handlers.create_goal(
        UserId(body.user_id), body.text, body.allocated_minutes,
    )
    return GoalCreatedResponse(
        goal=GoalResponse.model_validate(created.goal),
        user=UserResponse.model_validate(created.user),
        cycle_opened=created.cycle_opened,
    )


@router.get("", response_model=list[GoalResponse])
async def list_recent_goals(
    user_id: UUID | None = Query(None),
    handlers: GoalHandlers = Depends(get_goal_handlers),
):
    goals = await handlers.list_recent_goals(
        UserId(user_id) if user_id else None,
    )
    return [GoalResponse.model_validate(g) for g in goals]


@router.post("/{goal_id}/toggle", response_model=ToggleResponse)
async def toggle_goal(
    goal_id: UUID, handlers: GoalHandlers = Depends(get_goal_handlers),
):
    """Flip completion and advance the streak if the cycle is now satisfied."""
    outcome = await handlers.toggle_goal(GoalId(goal_id))
    return ToggleResponse(
        goal=GoalResponse.model_validate(outcome.goal),
        user=(
            UserResponse.model_validate(outcome.user) if outcome.user else None
        ),
        streak_advanced=outcome.streak_advanced,
    )


@router.delete("/{goal_id}")
async def delete_goal(
    goal_id: UUID,
    user_id: UUID | None = Query(None),
    handlers: GoalHandlers = Depends(get_goal_handlers),
):
    """Remove a goal within 30 minutes of its creation."""
    await handlers.delete_goal(GoalId(goal_id), requester_id=user_id)
    return {"message": "Goal deleted"}

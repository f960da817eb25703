"""Deletion Gate — the 30-minute grace period for removing a goal.

Invariants:
    - can_delete is True iff now - created_at <= 30 minutes (boundary inclusive)
    - No override exists; an expired goal can only leave the store through a
      satisfied cycle's purge
    - Ownership is checked only when the requester is known; when it is, it is
      checked before the window
"""

from datetime import datetime
from uuid import UUID

from accountability.core.errors import (
    DeletionWindowExpiredError, ErrorContext, GoalOwnershipError,
)
from accountability.core.repository_protocols import GoalLike
from accountability.core.time_windows import DELETION_WINDOW, as_utc


def can_delete(created_at: datetime, now: datetime) -> bool:
    return as_utc(now) - as_utc(created_at) <= DELETION_WINDOW


def check_deletion_allowed(
    goal: GoalLike, now: datetime, requester_id: UUID | None = None,
) -> None:
    """Raise if the goal may not be deleted at now by requester_id."""
    context = ErrorContext(goal_id=str(goal.id), user_id=str(goal.user_id))
    if requester_id is not None and requester_id != goal.user_id:
        raise GoalOwnershipError(str(goal.id), context)
    if not can_delete(goal.created_at, now):
        age = as_utc(now) - as_utc(goal.created_at)
        raise DeletionWindowExpiredError(age.total_seconds() / 60, context)

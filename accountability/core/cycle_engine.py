"""Cycle Engine — opens 24-hour cycles and derives their status from the clock.

Invariants:
    - cycle_start is set only when it is None (first goal since the last reset)
    - Status is computed on read: NONE without cycle_start, ACTIVE while
      remaining > 0, EXPIRED otherwise (the boundary instant itself is EXPIRED)
    - Expiry is advisory: nothing here deletes goals or resets the user
    - The countdown is a pure query; periodic refresh belongs to the caller

Design Decisions:
    - CycleStatus as frozen dataclass: one value carries everything a countdown
      display needs, so the API never recomputes boundaries itself
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from accountability.core.domain_types import CycleState
from accountability.core.repository_protocols import UserLike
from accountability.core.time_windows import CYCLE_DURATION, as_utc


@dataclass(frozen=True)
class CycleStatus:
    """Snapshot of a user's cycle at a given instant."""
    state: CycleState
    cycle_start: datetime | None = None
    ends_at: datetime | None = None
    remaining: timedelta | None = None

    @property
    def remaining_seconds(self) -> int | None:
        if self.remaining is None:
            return None
        return max(int(self.remaining.total_seconds()), 0)


def open_cycle_if_idle(user: UserLike, now: datetime) -> bool:
    """Start the user's cycle at now unless one is already open. Returns True if opened."""
    if user.cycle_start is not None:
        return False
    user.cycle_start = as_utc(now)
    return True


def cycle_status(cycle_start: datetime | None, now: datetime) -> CycleStatus:
    if cycle_start is None:
        return CycleStatus(state=CycleState.NONE)

    start = as_utc(cycle_start)
    ends_at = start + CYCLE_DURATION
    remaining = ends_at - as_utc(now)
    if remaining > timedelta(0):
        return CycleStatus(CycleState.ACTIVE, start, ends_at, remaining)
    return CycleStatus(CycleState.EXPIRED, start, ends_at, timedelta(0))


def format_countdown(status: CycleStatus) -> str:
    """Render remaining time as '<h>h <m>m <s>s' for display."""
    if status.state == CycleState.NONE:
        return ""
    if status.state == CycleState.EXPIRED:
        return "Cycle ended"

    total = status.remaining_seconds or 0
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours}h {minutes}m {seconds}s"

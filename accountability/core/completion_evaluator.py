"""Completion Evaluator — decides when a cycle is satisfied and advances the streak.

Invariants:
    - toggle_completion flips the flag (pure toggle, never an idempotent set)
    - A cycle is satisfied only by a NON-EMPTY goal set whose flags are all True
    - advance_streak is the only transition that increments streak or clears cycle_start
    - The goal set given here is the full live set, not the 3-day listing window

Design Decisions:
    - The purge of the user's goals is an IO step owned by the shell; this module
      only decides and mutates in-memory records, so the decision stays testable
"""

from typing import Iterable

from accountability.core.repository_protocols import GoalLike, UserLike


def toggle_completion(goal: GoalLike) -> bool:
    """Flip goal completion. Returns the new flag."""
    goal.completed = not goal.completed
    return goal.completed


def is_cycle_satisfied(goals: Iterable[GoalLike]) -> bool:
    # all() is vacuously True on an empty set; an empty cycle never earns a streak
    flags = [g.completed for g in goals]
    return len(flags) > 0 and all(flags)


def advance_streak(user: UserLike) -> int:
    """Increment streak and close the cycle. Returns the new streak."""
    user.streak += 1
    user.cycle_start = None
    return user.streak

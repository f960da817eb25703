"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId and GoalId wrap UUIDs: never use bare UUID in domain logic
    - All valid states encoded as Enums: no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
GoalId = NewType("GoalId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class CycleState(str, Enum):
    """Cycle status derived from cycle_start and the clock (never stored)."""
    NONE = "none"
    ACTIVE = "active"
    EXPIRED = "expired"


class LoginOutcome(str, Enum):
    """What a login request resolves to before any IO happens."""
    EXISTING = "existing"
    REGISTER = "register"
    REJECT = "reject"

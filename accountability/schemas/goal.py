"""Goal Schemas — creation request and goal/toggle responses.

Invariants:
    - GoalCreate.text: 1-500 chars, stripped, non-empty
    - GoalCreate.allocated_minutes: positive integer, no upper bound
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from accountability.core.time_windows import as_utc
from accountability.schemas.user import UserResponse


class GoalCreate(BaseModel):
    """Goal creation: owner id, description and time budget."""
    user_id: UUID
    text: str = Field(min_length=1, max_length=500)
    allocated_minutes: int = Field(ge=1)

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("text cannot be empty or whitespace")
        return v


class GoalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    user_name: str
    text: str
    allocated_minutes: int
    completed: bool
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class GoalCreatedResponse(BaseModel):
    goal: GoalResponse
    user: UserResponse
    cycle_opened: bool


class ToggleResponse(BaseModel):
    goal: GoalResponse
    user: UserResponse | None = None
    streak_advanced: bool

"""User Schemas — login request and user/cycle/streak responses.

Invariants:
    - LoginRequest.name: 1-100 chars, stripped, non-empty
    - profile_ref optional; blank strings collapse to None

Design Decisions:
    - from_attributes: responses validate straight from ORM rows
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from accountability.core.domain_types import CycleState
from accountability.core.time_windows import as_utc


class LoginRequest(BaseModel):
    """Login by display name; profile_ref registers a new name."""
    name: str = Field(min_length=1, max_length=100)
    profile_ref: str | None = Field(None, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("profile_ref")
    @classmethod
    def blank_profile_is_none(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()


class UserResponse(BaseModel):
    """User response: public-facing user data."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    profile_ref: str | None = None
    streak: int
    cycle_start: datetime | None = None

    @field_validator("cycle_start")
    @classmethod
    def cycle_start_utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v) if v is not None else None


class CycleStatusResponse(BaseModel):
    """Countdown data for a user's current cycle."""
    user_id: UUID
    state: CycleState
    cycle_start: datetime | None = None
    ends_at: datetime | None = None
    remaining_seconds: int | None = None
    countdown: str = ""


class StreakResponse(BaseModel):
    user: UserResponse
    advanced: bool

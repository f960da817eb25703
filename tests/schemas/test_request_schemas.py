"""Request schemas — login and goal creation validation.

Invariants:
    - Names and goal texts are stripped; whitespace-only values are rejected
    - A blank profile_ref is treated as absent (login, not registration)
    - allocated_minutes must be positive; large budgets are accepted
"""

import uuid

import pytest
from pydantic import ValidationError

from accountability.schemas.goal import GoalCreate, GoalResponse
from accountability.schemas.user import LoginRequest, UserResponse

from tests.fakes import T0, GoalRecord, UserRecord


# --- LoginRequest -------------------------------------------------------------

def test_login_name_is_stripped():
    assert LoginRequest(name="  alice ").name == "alice"


def test_login_rejects_whitespace_name():
    with pytest.raises(ValidationError):
        LoginRequest(name="   ")


def test_login_name_max_length_enforced():
    with pytest.raises(ValidationError):
        LoginRequest(name="x" * 101)


def test_blank_profile_ref_becomes_none():
    assert LoginRequest(name="alice", profile_ref="   ").profile_ref is None


def test_profile_ref_is_stripped():
    req = LoginRequest(name="alice", profile_ref=" https://github.com/alice ")
    assert req.profile_ref == "https://github.com/alice"


# --- GoalCreate ---------------------------------------------------------------

def test_goal_text_is_stripped():
    goal = GoalCreate(user_id=uuid.uuid4(), text=" Read ", allocated_minutes=15)
    assert goal.text == "Read"


@pytest.mark.parametrize("minutes", [0, -5])
def test_allocated_minutes_must_be_positive(minutes):
    with pytest.raises(ValidationError):
        GoalCreate(user_id=uuid.uuid4(), text="Read", allocated_minutes=minutes)


def test_allocated_minutes_beyond_one_day_accepted():
    goal = GoalCreate(user_id=uuid.uuid4(), text="Read", allocated_minutes=1441)
    assert goal.allocated_minutes == 1441


def test_goal_text_max_length_enforced():
    with pytest.raises(ValidationError):
        GoalCreate(user_id=uuid.uuid4(), text="x" * 501, allocated_minutes=10)


# --- Responses ----------------------------------------------------------------

def test_naive_timestamps_are_reported_as_utc():
    user = UserRecord(cycle_start=T0.replace(tzinfo=None))
    assert UserResponse.model_validate(user, from_attributes=True).cycle_start == T0

    goal = GoalRecord(user_id=user.id, created_at=T0.replace(tzinfo=None))
    goal.user_name = user.name
    resp = GoalResponse.model_validate(goal, from_attributes=True)
    assert resp.created_at.tzinfo is not None
    assert resp.created_at == T0

"""Error Hierarchy — tests for codes, statuses and the REST envelope.

Tests cover:
    - each taxonomy member maps to a distinct code and HTTP status
    - to_response() shape; the message is always the reason string
"""

from accountability.core.errors import (
    AccountabilityError, DeletionWindowExpiredError, ErrorCategory, ErrorContext,
    GoalOwnershipError, IdentityValidationFailedError, NameTakenError,
    NotRegisteredError, ResourceNotFoundError, StoreUnavailableError,
)


def _all_errors() -> list[AccountabilityError]:
    return [
        NotRegisteredError("alice"),
        IdentityValidationFailedError("ghost", "GitHub user not found"),
        ResourceNotFoundError("Goal", "123"),
        DeletionWindowExpiredError(31.0),
        GoalOwnershipError("123"),
        NameTakenError("alice"),
        StoreUnavailableError("Connection or operational error", "commit"),
    ]


def test_error_codes_are_distinct():
    codes = [e.code for e in _all_errors()]
    assert len(codes) == len(set(codes))


def test_reason_strings_are_distinct():
    messages = [e.message for e in _all_errors()]
    assert len(messages) == len(set(messages))


def test_http_statuses():
    statuses = {type(e).__name__: e.http_status for e in _all_errors()}
    assert statuses == {
        "NotRegisteredError": 404,
        "IdentityValidationFailedError": 400,
        "ResourceNotFoundError": 404,
        "DeletionWindowExpiredError": 403,
        "GoalOwnershipError": 403,
        "NameTakenError": 409,
        "StoreUnavailableError": 503,
    }


def test_not_registered_reason_matches_login_hint():
    assert NotRegisteredError("bob").message == (
        "User not found. Enter correct name or provide GitHub to register."
    )


def test_store_unavailable_is_database_category():
    err = StoreUnavailableError("boom", "commit")
    assert err.category == ErrorCategory.DATABASE
    assert err.message == "Store commit failed: boom"


def test_to_response_envelope():
    err = ResourceNotFoundError("Goal", "abc", ErrorContext(goal_id="abc"))
    body = err.to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "Goal 'abc' not found"
    assert body["category"] == "resource_not_found"
    assert body["severity"] == "error"
    assert body["context"]["goal_id"] == "abc"
    assert "timestamp" in body


def test_response_message_is_the_reason_string():
    ctx = ErrorContext(user_id="u-1")
    err = StoreUnavailableError("pool exhausted", "execute", ctx)
    body = err.to_response()["error"]
    assert body["message"] == "Store execute failed: pool exhausted"
    assert body["context"] == {"user_id": "u-1", "goal_id": None}

"""Login Handlers — lookup, rejection and verified registration.

Invariants:
    - Existing names return unchanged and never hit the identity validator
    - Unknown names need a verified profile reference to register
    - Failed verification leaves the store untouched
    - A duplicate name is NameTakenError at the store; login resolves it to the stored user
"""

import pytest
from sqlalchemy import func, select

from accountability.core.errors import (
    IdentityValidationFailedError, NameTakenError, NotRegisteredError,
)
from accountability.infrastructure.sql_store import SqlUserRepository
from accountability.models.user import User


async def _user_count(db) -> int:
    result = await db.execute(select(func.count()).select_from(User))
    return result.scalar_one()


async def test_existing_user_logs_in_unchanged(login_handlers, seed_user, identity):
    seeded = await seed_user("alice", streak=3)

    user = await login_handlers.login("alice", "https://github.com/someone-else")

    assert user.id == seeded.id
    assert user.streak == 3
    assert user.profile_ref == "https://github.com/alice"
    assert identity.calls == []


async def test_unknown_name_without_ref_is_not_registered(
    login_handlers, identity, test_db,
):
    with pytest.raises(NotRegisteredError) as exc:
        await login_handlers.login("alice")
    assert exc.value.http_status == 404
    assert identity.calls == []
    assert await _user_count(test_db) == 0


async def test_name_lookup_is_case_sensitive(login_handlers, seed_user):
    await seed_user("alice")
    with pytest.raises(NotRegisteredError):
        await login_handlers.login("Alice")


async def test_verified_ref_registers_new_user(login_handlers, identity, test_db):
    user = await login_handlers.login("alice", "https://github.com/alice")

    assert user.name == "alice"
    assert user.streak == 0
    assert user.cycle_start is None
    assert user.profile_ref == "https://github.com/alice"
    assert identity.calls == ["https://github.com/alice"]
    assert await _user_count(test_db) == 1


async def test_registered_user_can_log_in_by_name(login_handlers):
    created = await login_handlers.login("alice", "https://github.com/alice")
    again = await login_handlers.login("alice")
    assert again.id == created.id


async def test_unverified_ref_is_rejected(login_handlers, test_db):
    with pytest.raises(IdentityValidationFailedError) as exc:
        await login_handlers.login("ghost", "https://github.com/ghost")
    assert exc.value.reason == "GitHub user not found"
    assert await _user_count(test_db) == 0


async def test_identity_errors_propagate(login_handlers, identity, test_db):
    identity.error = IdentityValidationFailedError("octocat", "GitHub returned 403")
    with pytest.raises(IdentityValidationFailedError):
        await login_handlers.login("octo", "octocat")
    assert await _user_count(test_db) == 0


async def test_lookalike_profile_url_never_registers(login_handlers, identity, test_db):
    identity.known.add("https://notgithub.com/alice")
    with pytest.raises(IdentityValidationFailedError):
        await login_handlers.login("alice", "https://notgithub.com/alice")
    assert identity.calls == []
    assert await _user_count(test_db) == 0


async def test_duplicate_name_is_name_taken(seed_user, test_db):
    await seed_user("alice")
    users = SqlUserRepository(test_db)

    with pytest.raises(NameTakenError) as exc:
        await users.create("alice", "https://github.com/alice")
    assert exc.value.http_status == 409
    assert exc.value.code == "NAME_TAKEN"
    assert await _user_count(test_db) == 1


async def test_registration_losing_name_race_logs_in_stored_user(
    login_handlers, seed_user, test_db, monkeypatch,
):
    stored = await seed_user("alice", streak=2)
    stored_id = stored.id
    real_find = login_handlers.users.find_by_name
    lookups: list[str] = []

    async def stale_first_lookup(name):
        lookups.append(name)
        if len(lookups) == 1:
            return None
        return await real_find(name)

    monkeypatch.setattr(login_handlers.users, "find_by_name", stale_first_lookup)

    user = await login_handlers.login("alice", "https://github.com/alice")

    assert user.id == stored_id
    assert user.streak == 2
    assert lookups == ["alice", "alice"]
    assert await _user_count(test_db) == 1

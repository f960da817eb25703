"""Login Decision — tests for login outcomes and GitHub reference parsing.

Tests cover:
    - existing user wins regardless of profile reference
    - missing user: reject without reference, register with one
    - extract_profile_username handles URLs, bare logins and garbage
"""

import pytest

from accountability.core.domain_types import LoginOutcome
from accountability.core.errors import IdentityValidationFailedError
from accountability.core.login_decision import decide_login, extract_profile_username

from tests.fakes import UserRecord


# ─── decide_login ────────────────────────────────────────────────

def test_existing_user_logs_in():
    assert decide_login(UserRecord(), None) == LoginOutcome.EXISTING


def test_existing_user_ignores_profile_ref():
    assert decide_login(UserRecord(), "https://github.com/other") == LoginOutcome.EXISTING


def test_unknown_user_without_ref_is_rejected():
    assert decide_login(None, None) == LoginOutcome.REJECT


def test_unknown_user_with_blank_ref_is_rejected():
    assert decide_login(None, "   ") == LoginOutcome.REJECT


def test_unknown_user_with_ref_registers():
    assert decide_login(None, "https://github.com/alice") == LoginOutcome.REGISTER


# ─── extract_profile_username ────────────────────────────────────

@pytest.mark.parametrize("ref", [
    "https://github.com/octocat",
    "http://github.com/octocat/",
    "github.com/octocat",
    "https://www.github.com/octocat",
    "https://github.com/octocat?tab=repositories",
    "https://github.com/octocat/hello-world",
    "octocat",
    "  octocat  ",
    "@octocat",
])
def test_extracts_login(ref):
    assert extract_profile_username(ref) == "octocat"


def test_keeps_inner_hyphen_and_case():
    assert extract_profile_username("https://GitHub.com/Mona-Lisa") == "Mona-Lisa"


@pytest.mark.parametrize("ref", [
    "",
    "https://github.com/",
    "https://gitlab.com/octocat",
    "https://notgithub.com/octocat",
    "github.com.evil.io/octocat",
    "https://github.com@evil.io/octocat",
    "http://[github.com/octocat",
    "-octocat",
    "octocat-",
    "octo--cat",
    "octo cat",
    "a" * 40,
])
def test_rejects_invalid_reference(ref):
    with pytest.raises(IdentityValidationFailedError) as exc:
        extract_profile_username(ref)
    assert exc.value.code == "IDENTITY_VALIDATION_FAILED"


def test_accepts_39_char_login():
    assert extract_profile_username("a" * 39) == "a" * 39


def test_lookalike_host_is_rejected_as_non_github_url():
    with pytest.raises(IdentityValidationFailedError) as exc:
        extract_profile_username("https://notgithub.com/alice")
    assert exc.value.reason == "not a GitHub profile URL"

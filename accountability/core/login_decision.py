"""Login Decision — name lookup outcome and GitHub profile reference parsing.

Invariants:
    - An existing user is returned unchanged; a supplied profile reference is ignored
    - A missing user without a profile reference is rejected (NotRegistered)
    - Names match exactly (case-sensitive); there is no secret, by product choice
    - extract_profile_username accepts github.com profile URLs or bare logins and rejects
      anything that is not a syntactically valid GitHub login
"""

import re
from urllib.parse import urlsplit

from accountability.core.domain_types import LoginOutcome
from accountability.core.errors import IdentityValidationFailedError
from accountability.core.repository_protocols import UserLike

# 1-39 chars, alphanumerics and single inner hyphens
_GITHUB_LOGIN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9]|-(?=[A-Za-z0-9])){0,38}$")
_PROFILE_HOSTS = ("github.com", "www.github.com")


def decide_login(existing: UserLike | None, profile_ref: str | None) -> LoginOutcome:
    if existing is not None:
        return LoginOutcome.EXISTING
    if not profile_ref or not profile_ref.strip():
        return LoginOutcome.REJECT
    return LoginOutcome.REGISTER


def extract_profile_username(profile_ref: str) -> str:
    """Pull the GitHub login out of 'https://github.com/<login>' or '<login>'."""
    ref = profile_ref.strip()
    if "/" in ref:
        try:
            parts = urlsplit(ref if "://" in ref else f"https://{ref}")
        except ValueError:
            parts = None
        if parts is None or (parts.hostname or "") not in _PROFILE_HOSTS:
            raise IdentityValidationFailedError(
                profile_ref, "not a GitHub profile URL",
            )
        username = parts.path.strip("/").split("/", 1)[0]
    else:
        username = ref
    if username.startswith("@"):
        username = username[1:]

    if not _GITHUB_LOGIN.match(username):
        raise IdentityValidationFailedError(
            profile_ref, "not a valid GitHub profile reference",
        )
    return username

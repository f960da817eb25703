"""Login Handlers — name lookup with first-time registration behind a profile check.

Invariants:
    - Existing names log in unchanged; the profile reference is never rewritten
    - Registration happens only after the identity collaborator verified the reference
    - New users start with streak 0 and no cycle
    - A registration that loses a same-name race logs in as the stored user

Design Decisions:
    - Reference syntax and identity checked before any write: a rejected profile
      leaves the store untouched and lookalike hosts never reach the validator
"""

import logging

from accountability.core.domain_types import LoginOutcome
from accountability.core.errors import (
    IdentityValidationFailedError, NameTakenError, NotRegisteredError,
)
from accountability.core.login_decision import decide_login, extract_profile_username
from accountability.core.repository_protocols import (
    IdentityValidator, UnitOfWork, UserLike, UserRepository,
)

logger = logging.getLogger(__name__)


class LoginHandlers:
    """Login-or-register."""

    def __init__(
        self,
        users: UserRepository,
        uow: UnitOfWork,
        identity: IdentityValidator,
    ):
        self.users = users
        self.uow = uow
        self.identity = identity

    async def login(self, name: str, profile_ref: str | None = None) -> UserLike:
        existing = await self.users.find_by_name(name)
        outcome = decide_login(existing, profile_ref)

        if outcome == LoginOutcome.EXISTING:
            return existing
        if outcome == LoginOutcome.REJECT:
            logger.warning(f"Login rejected, unknown name without profile: {name!r}")
            raise NotRegisteredError(name)

        reference = profile_ref.strip()
        extract_profile_username(reference)
        if not await self.identity.verify_profile(reference):
            raise IdentityValidationFailedError(reference, "GitHub user not found")

        try:
            user = await self.users.create(name, reference)
        except NameTakenError:
            winner = await self.users.find_by_name(name)
            if winner is None:
                raise
            return winner
        await self.uow.commit()
        logger.info(f"User registered: {name!r}", extra={"user_id": user.id})
        return user

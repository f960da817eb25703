"""GitHub Identity Validator — verifies a profile reference exists via the GitHub REST API.

Invariants:
    - 200: verified; 404: not verified (returns False, caller decides the error)
    - Transient errors (5xx, connection, timeout): retried with exponential backoff
    - Other 4xx (403 rate limit, 401 bad token): immediate failure, no retry
    - All failures mapped to IdentityValidationFailedError (core/errors.py)

Design Decisions:
    - Wrapper over raw httpx client: isolates retry logic from the login service
    - ±25% jitter on backoff: prevents thundering herd on shared rate limits
    - Injected AsyncClient: tests pass an httpx.MockTransport instead of the network
"""

import asyncio
import logging
import random

import httpx

from accountability.core.errors import IdentityValidationFailedError
from accountability.core.login_decision import extract_profile_username

logger = logging.getLogger(__name__)


class GitHubProfileValidator:
    """Checks that a GitHub login exists. Implements IdentityValidator."""

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        token: str | None = None,
        timeout_seconds: float = 10.0,
        max_retries: int = 2,
        base_delay_ms: int = 250,
        max_delay_ms: int = 5_000,
        client: httpx.AsyncClient | None = None,
    ):
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "accountability-api",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.client = client or httpx.AsyncClient(
            base_url=base_url, timeout=timeout_seconds, headers=headers,
        )
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def verify_profile(self, reference: str) -> bool:
        """Return True if the referenced GitHub account exists."""
        username = extract_profile_username(reference)

        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.get(f"/users/{username}")
            except httpx.TransportError as e:
                await self._handle_transient(reference, f"connection error: {e}", attempt)
                continue

            if response.status_code == 200:
                logger.info(f"GitHub profile verified: {username}")
                return True
            if response.status_code == 404:
                logger.warning(f"GitHub profile not found: {username}")
                return False
            if response.status_code >= 500:
                await self._handle_transient(
                    reference, f"GitHub returned {response.status_code}", attempt,
                )
                continue
            raise IdentityValidationFailedError(
                reference, f"GitHub returned {response.status_code}",
            )

        # unreachable: the last attempt either returns or raises
        raise IdentityValidationFailedError(reference, "retries exhausted")

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _handle_transient(self, reference: str, reason: str, attempt: int):
        if attempt >= self.max_retries:
            logger.error(f"GitHub validation failed after {attempt + 1} attempts: {reason}")
            raise IdentityValidationFailedError(reference, reason)
        delay = self._backoff_ms(attempt)
        logger.warning(
            f"GitHub transient error ({reason}), retry in {delay}ms",
            extra={"attempt": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    def _backoff_ms(self, attempt: int) -> int:
        delay = min(self.base_delay_ms * (2 ** attempt), self.max_delay_ms)
        jitter = delay * 0.25 * (2 * random.random() - 1)
        return max(int(delay + jitter), 0)

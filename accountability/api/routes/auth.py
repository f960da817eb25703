"""Auth Routes — name-based login with GitHub-backed first registration.

Invariants:
    - No password or token: the display name is the identity key (explicit non-goal)
    - 404 NOT_REGISTERED for unknown names without a profile reference
"""

from fastapi import APIRouter, Depends

from accountability.api.deps import get_login_handlers
from accountability.schemas.user import LoginRequest, UserResponse
from accountability.services.handle_login import LoginHandlers

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=UserResponse)
async def login(
    body: LoginRequest, handlers: LoginHandlers = Depends(get_login_handlers),
):
    """Log in an existing user or register a new one."""
    user = await handlers.login(body.name, body.profile_ref)
    return UserResponse.model_validate(user)

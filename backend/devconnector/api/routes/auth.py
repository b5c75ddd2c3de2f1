"""Authentication — login (POST /api/auth) and the caller's record (GET /api/auth).

Invariants:
    - Unknown e-mail and wrong password produce the SAME 400 body
    - The password hash never appears in a response (UserResponse has no such field)
"""

import logging

from fastapi import APIRouter, Depends

from devconnector.api.pipeline import get_users, pipeline
from devconnector.config import Settings, get_settings
from devconnector.core.domain_types import RequestContext
from devconnector.core.errors import (
    ErrorContext, InvalidCredentialsError, ResourceNotFoundError,
)
from devconnector.core.validate_payload import is_email, required
from devconnector.core.verify_token import issue_token
from devconnector.infrastructure.passwords import check_password
from devconnector.repositories.users import UserRepository
from devconnector.schemas.user import TokenResponse, UserLogin, UserResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])

LOGIN_RULES = (
    is_email("email", "Please include a valid email"),
    required("password", "Please enter a password"),
)


@router.get("", response_model=UserResponse)
async def current_user(
    ctx: RequestContext = Depends(pipeline()),
    users: UserRepository = Depends(get_users),
):
    user = await users.get(ctx.user_id)
    if user is None:
        raise ResourceNotFoundError("User", str(ctx.user_id))
    return user


@router.post("", response_model=TokenResponse)
async def login(
    ctx: RequestContext = Depends(
        pipeline(*LOGIN_RULES, schema=UserLogin, authenticated=False),
    ),
    users: UserRepository = Depends(get_users),
    settings: Settings = Depends(get_settings),
):
    """Exchange e-mail and password for a signed token."""
    body: UserLogin = ctx.body
    user = await users.get_by_email(body.email)
    if user is None or not await check_password(body.password, user.password):
        logger.info(
            "Login rejected",
            extra={"user_id": str(user.id) if user else None},
        )
        raise InvalidCredentialsError(ErrorContext())

    token = issue_token(
        user.id, settings.jwt_secret, settings.jwt_expires_in_seconds,
    )
    return TokenResponse(token=token)

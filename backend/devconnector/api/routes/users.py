"""User Registration — POST /api/users.

Invariants:
    - Validation runs before any store access; every broken rule is reported
    - Duplicate e-mail -> 400 {"errors": [{"msg": "User already exists"}]}, nothing written
    - Password is bcrypt-hashed before persistence; the response is only a token
"""

import logging

from fastapi import APIRouter, Depends

from devconnector.api.pipeline import get_users, pipeline
from devconnector.config import Settings, get_settings
from devconnector.core.derive_avatar import derive_avatar
from devconnector.core.domain_types import RequestContext
from devconnector.core.errors import ConflictError, Envelope
from devconnector.core.validate_payload import is_email, min_length, required
from devconnector.core.verify_token import issue_token
from devconnector.infrastructure.passwords import hash_password
from devconnector.repositories.users import UserRepository
from devconnector.schemas.user import TokenResponse, UserRegister

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])

REGISTER_RULES = (
    required("name", "Name is required"),
    is_email("email", "Please include a valid email"),
    min_length(
        "password", 6, "Please enter a valid password with min of 6 chars",
    ),
)


@router.post("", response_model=TokenResponse)
async def register(
    ctx: RequestContext = Depends(
        pipeline(*REGISTER_RULES, schema=UserRegister, authenticated=False),
    ),
    users: UserRepository = Depends(get_users),
    settings: Settings = Depends(get_settings),
):
    """Register a user and return a signed token."""
    body: UserRegister = ctx.body
    if await users.get_by_email(body.email):
        raise ConflictError("User already exists", Envelope.ERRORS)

    password_hash = await hash_password(body.password, settings.bcrypt_rounds)
    user = await users.create(
        name=body.name.strip(),
        email=body.email,
        password_hash=password_hash,
        avatar=derive_avatar(body.email),
    )
    token = issue_token(
        user.id, settings.jwt_secret, settings.jwt_expires_in_seconds,
    )
    return TokenResponse(token=token)

"""Request Pipeline — gate, validation stage and repository wiring shared by every route.

Invariants:
    - Order is fixed: authenticate -> validate -> (route) load -> authorize -> mutate
    - Authentication failures are reported before the body is even read
    - Every validation rule runs; the route never sees an invalid payload
    - A missing token and a bad token produce the same 401 body; the specific
      verification failure is only logged
    - Malformed path ids are reported as not-found, never as a server error

Design Decisions:
    - pipeline(...) builds one FastAPI dependency per route returning an explicit
      RequestContext, instead of stashing the identity on request.state
    - Repositories are request-scoped dependencies sharing the single get_db
      session (FastAPI caches a dependency per request)
"""

import logging
from typing import Any
from uuid import UUID

from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from devconnector.config import Settings, get_settings
from devconnector.core.domain_types import Identity, RequestContext
from devconnector.core.errors import (
    ErrorContext, PayloadValidationError, ResourceNotFoundError,
    UnauthenticatedError,
)
from devconnector.core.validate_payload import Rule, validate_payload
from devconnector.core.verify_token import VerificationError, verify_token
from devconnector.infrastructure.database import get_db
from devconnector.repositories.posts import PostRepository
from devconnector.repositories.profiles import ProfileRepository
from devconnector.repositories.users import UserRepository

logger = logging.getLogger(__name__)

AUTH_HEADER = "x-auth-token"


# ─── Stages ──────────────────────────────────────────────────────

def authenticate(token: str | None, secret: str) -> Identity:
    """Gate: turn the header value into an Identity or raise UnauthenticatedError."""
    if not token:
        raise UnauthenticatedError()
    try:
        return verify_token(token, secret)
    except VerificationError as e:
        logger.warning(
            f"Token rejected: {e}", extra={"error_code": type(e).__name__},
        )
        raise UnauthenticatedError(
            ErrorContext(debug_info={"reason": type(e).__name__}),
        ) from e


async def read_json_body(request: Request) -> Any:
    """Request JSON, or {} when the body is empty or not JSON."""
    try:
        return await request.json()
    except ValueError:
        return {}


def parse_body(payload: Any, schema: type[BaseModel]) -> BaseModel:
    """Load an already-validated payload into its request model."""
    try:
        return schema.model_validate(payload if isinstance(payload, dict) else {})
    except ValidationError as e:
        raise PayloadValidationError([
            {
                "msg": err["msg"],
                "param": ".".join(str(loc) for loc in err["loc"]),
            }
            for err in e.errors()
        ]) from e


def pipeline(
    *rules: Rule,
    schema: type[BaseModel] | None = None,
    authenticated: bool = True,
):
    """Build the dependency that runs the gate and validation stage for a route."""

    async def run(
        request: Request, settings: Settings = Depends(get_settings),
    ) -> RequestContext:
        identity = None
        if authenticated:
            identity = authenticate(
                request.headers.get(AUTH_HEADER), settings.jwt_secret,
            )
        body = None
        if rules or schema is not None:
            payload = await read_json_body(request)
            validate_payload(payload, rules)
            body = parse_body(payload, schema) if schema is not None else payload
        return RequestContext(
            identity=identity, body=body, params=dict(request.path_params),
        )

    return run


def parse_id(raw: str, resource_type: str) -> UUID:
    """Path id -> UUID; anything that is not a valid id is simply not found."""
    try:
        return UUID(raw)
    except (ValueError, TypeError) as e:
        raise ResourceNotFoundError(resource_type, raw) from e


# ─── Repositories ────────────────────────────────────────────────

def get_users(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_profiles(db: AsyncSession = Depends(get_db)) -> ProfileRepository:
    return ProfileRepository(db)


def get_posts(db: AsyncSession = Depends(get_db)) -> PostRepository:
    return PostRepository(db)

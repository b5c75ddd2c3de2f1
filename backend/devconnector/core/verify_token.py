"""Credential Verifier — signs and verifies the bearer tokens handed to clients.

Invariants:
    - Both functions are PURE: no IO, no DB, no clock other than the one passed in
    - Payload shape is {"user": {"id": "<uuid>"}, "iat": ..., "exp": ...}
    - Every failure raises a VerificationError subclass, never a PyJWT exception

Design Decisions:
    - HS256 shared secret (PyJWT): the API is the only issuer and only verifier
    - Errors are plain exceptions, not DevConnectorError: the gate decides the HTTP
      mapping, this module only says what went wrong
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from devconnector.core.domain_types import Identity, UserId

ALGORITHM = "HS256"


class VerificationError(Exception):
    """Token could not be turned into an Identity."""


class TokenMalformedError(VerificationError):
    pass


class TokenExpiredError(VerificationError):
    pass


class SignatureMismatchError(VerificationError):
    pass


def issue_token(
    user_id: UUID,
    secret: str,
    expires_in: int,
    now: datetime | None = None,
) -> str:
    """Sign a token for user_id valid for expires_in seconds."""
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "user": {"id": str(user_id)},
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_token(token: str, secret: str) -> Identity:
    """Decode a signed token and return the identity it carries."""
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("token has expired") from e
    except jwt.InvalidSignatureError as e:
        raise SignatureMismatchError("token signature does not match") from e
    except jwt.InvalidTokenError as e:
        raise TokenMalformedError(f"token could not be decoded: {e}") from e

    user = payload.get("user")
    raw_id = user.get("id") if isinstance(user, dict) else None
    if not isinstance(raw_id, str):
        raise TokenMalformedError("token has no user id claim")
    try:
        return Identity(user_id=UserId(UUID(raw_id)))
    except ValueError as e:
        raise TokenMalformedError("token user id is not a valid id") from e

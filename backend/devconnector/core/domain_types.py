"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps the UUID carried by a verified token
    - Sub-entry ids (likes, comments, experience, education) are UUID strings
      stored inside JSON columns
    - All valid policy states encoded as Enums, never raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - RequestContext is a frozen dataclass threaded explicitly through the pipeline
      instead of attaching attributes to the framework request
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, recovered from a verified token."""
    user_id: UserId

    def owns(self, owner_id: UUID | str | None) -> bool:
        return owner_id is not None and str(owner_id) == str(self.user_id)


@dataclass(frozen=True)
class RequestContext:
    """Everything a route handler needs, collected by the pipeline stages."""
    identity: Identity | None = None
    body: Any = None
    params: dict[str, str] = field(default_factory=dict)

    @property
    def user_id(self) -> UserId:
        if self.identity is None:
            raise RuntimeError("RequestContext has no identity (route is not gated)")
        return self.identity.user_id


# ─── Enums ───────────────────────────────────────────────────────

class Action(str, Enum):
    """Mutations guarded by the ownership policy."""
    DELETE_POST = "delete_post"
    MUTATE_PROFILE = "mutate_profile"
    DELETE_COMMENT = "delete_comment"


class Decision(str, Enum):
    ALLOWED = "allowed"
    DENIED = "denied"


class RuleKind(str, Enum):
    """Validation rule kinds understood by the payload validator."""
    REQUIRED = "required"
    IS_EMAIL = "is_email"
    MIN_LENGTH = "min_length"

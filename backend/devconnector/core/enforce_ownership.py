"""Ownership Policy — decides whether an identity may mutate a loaded resource.

Invariants:
    - authorize is PURE: no IO, no DB, no side effects
    - Only called AFTER the resource is loaded (not-found is reported first by the caller)
    - DELETE_COMMENT is allowed for the comment author OR the parent post owner

Design Decisions:
    - Returns a Decision instead of raising: the policy stays testable without
      exception plumbing, require_allowed converts at the shell boundary
"""

from uuid import UUID

from devconnector.core.domain_types import Action, Decision, Identity
from devconnector.core.errors import ErrorContext, NotAuthorizedError


def authorize(
    identity: Identity,
    action: Action,
    owner_id: UUID | str | None,
    author_id: UUID | str | None = None,
) -> Decision:
    """Decide whether identity may perform action on a resource owned by owner_id."""
    if identity.owns(owner_id):
        return Decision.ALLOWED
    if action is Action.DELETE_COMMENT and identity.owns(author_id):
        return Decision.ALLOWED
    return Decision.DENIED


def require_allowed(
    identity: Identity,
    action: Action,
    owner_id: UUID | str | None,
    author_id: UUID | str | None = None,
) -> None:
    """Raise NotAuthorizedError unless the policy allows the action."""
    if authorize(identity, action, owner_id, author_id) is Decision.DENIED:
        raise NotAuthorizedError(
            ErrorContext(
                user_id=str(identity.user_id),
                debug_info={"action": action.value},
            ),
        )

"""Sub-entry Operations — pure list transforms for embedded likes, comments,
experience and education entries.

Invariants:
    - Functions never mutate their input list; they return a new one
      (SQLAlchemy only sees a JSON column change on reassignment)
    - New entries get a fresh UUID string under "_id" and go to the FRONT
    - Removal is by entry id, never by a computed index
    - A user id appears at most once in a like list
"""

import uuid
from typing import Any
from uuid import UUID

from devconnector.core.errors import ConflictError

Entry = dict[str, Any]


def new_entry_id() -> str:
    return str(uuid.uuid4())


def prepend_entry(
    entries: list[Entry], fields: dict[str, Any],
) -> tuple[list[Entry], Entry]:
    """Insert a new entry at the front. Returns (new_list, inserted_entry)."""
    entry = {"_id": new_entry_id(), **fields}
    return [entry, *entries], entry


def find_entry(entries: list[Entry], entry_id: str) -> Entry | None:
    return next((e for e in entries if e.get("_id") == entry_id), None)


def remove_entry(
    entries: list[Entry], entry_id: str,
) -> tuple[list[Entry], Entry | None]:
    """Drop the entry with entry_id. Returns (new_list, removed_entry_or_None)."""
    removed = find_entry(entries, entry_id)
    if removed is None:
        return list(entries), None
    return [e for e in entries if e is not removed], removed


def has_liked(likes: list[Entry], user_id: UUID | str) -> bool:
    return any(like.get("user") == str(user_id) for like in likes)


def add_like(likes: list[Entry], user_id: UUID | str) -> list[Entry]:
    if has_liked(likes, user_id):
        raise ConflictError("post already liked")
    updated, _ = prepend_entry(likes, {"user": str(user_id)})
    return updated


def remove_like(likes: list[Entry], user_id: UUID | str) -> list[Entry]:
    if not has_liked(likes, user_id):
        raise ConflictError("post has not yet been liked")
    return [like for like in likes if like.get("user") != str(user_id)]

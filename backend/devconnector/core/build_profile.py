"""Profile Builder — turns an upsert payload into the stored profile fields.

Invariants:
    - PURE: payload in, dict out
    - Empty or missing scalar fields are left out so an update never blanks them
    - skills is always stored as a list of trimmed, non-empty strings; a value
      that splits to nothing (", ,") is a "skills is required" violation
    - social is rebuilt on every upsert from the links present in the payload
"""

from typing import Any, Mapping

from devconnector.core.errors import PayloadValidationError

PROFILE_FIELDS = (
    "company", "website", "location", "bio", "status", "githubusername",
)
SOCIAL_FIELDS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


def split_skills(skills: str | list | None) -> list[str]:
    """'a, b ,c' -> ['a', 'b', 'c']. Lists are trimmed item by item."""
    if skills is None:
        return []
    items = skills.split(",") if isinstance(skills, str) else skills
    return [str(s).strip() for s in items if str(s).strip()]


def build_profile_fields(payload: Mapping[str, Any]) -> dict[str, Any]:
    fields: dict[str, Any] = {
        name: payload[name] for name in PROFILE_FIELDS if payload.get(name)
    }
    if payload.get("skills"):
        fields["skills"] = split_skills(payload["skills"])
        if not fields["skills"]:
            raise PayloadValidationError(
                [{"msg": "skills is required", "param": "skills"}],
            )
    fields["social"] = {
        name: payload[name] for name in SOCIAL_FIELDS if payload.get(name)
    }
    return fields

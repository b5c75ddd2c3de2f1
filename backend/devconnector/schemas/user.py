"""User Schemas — request bodies for register/login and the public user shapes.

Invariants:
    - No response model has a password field: the hash cannot leak by accident
    - Request fields are optional here; presence/format is enforced by the
      route's validation rules, which run first and report every violation
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserRegister(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return v.strip().lower() if v else v


class UserLogin(BaseModel):
    email: str | None = None
    password: str | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return v.strip().lower() if v else v


class TokenResponse(BaseModel):
    token: str


class UserSummary(BaseModel):
    """Public fields attached to a profile (name and avatar only)."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(serialization_alias="_id")
    name: str
    avatar: str | None = None


class UserResponse(UserSummary):
    """The caller's own record, as returned by GET /api/auth."""
    email: str
    date: datetime

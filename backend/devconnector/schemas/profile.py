"""Profile Schemas — upsert/entry request bodies and the profile response.

Invariants:
    - Entry "from" is exposed under its JSON name; Python uses from_
    - Embedded entries always carry their "_id"
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from devconnector.schemas.user import UserSummary


class ProfileUpsert(BaseModel):
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str | None = None
    githubusername: str | None = None
    skills: str | list[str] | None = None
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class _DatedEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str | None = Field(None, alias="from")
    to: str | None = None
    current: bool = False
    description: str | None = None


class ExperienceCreate(_DatedEntry):
    title: str | None = None
    company: str | None = None
    location: str | None = None


class EducationCreate(_DatedEntry):
    school: str | None = None
    degree: str | None = None
    fieldofstudy: str | None = None


class ExperienceEntry(ExperienceCreate):
    id: str = Field(alias="_id")


class EducationEntry(EducationCreate):
    id: str = Field(alias="_id")


class SocialLinks(BaseModel):
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(serialization_alias="_id")
    user: UserSummary
    company: str | None = None
    website: str | None = None
    location: str | None = None
    status: str
    bio: str | None = None
    githubusername: str | None = None
    skills: list[str] = []
    social: SocialLinks = SocialLinks()
    experience: list[ExperienceEntry] = []
    education: list[EducationEntry] = []
    date: datetime

"""Post Schemas — post/comment request bodies and feed responses."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    text: str | None = None


class CommentCreate(BaseModel):
    text: str | None = None


class LikeEntry(BaseModel):
    id: str = Field(alias="_id")
    user: str


class CommentEntry(BaseModel):
    id: str = Field(alias="_id")
    user: str
    text: str
    name: str | None = None
    avatar: str | None = None
    date: datetime


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(serialization_alias="_id")
    user: UUID = Field(validation_alias="user_id")
    text: str
    name: str | None = None
    avatar: str | None = None
    like: list[LikeEntry] = []
    comments: list[CommentEntry] = []
    date: datetime

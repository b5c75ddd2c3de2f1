"""Profile ORM — one developer profile per user.

Invariants:
    - user_id is unique: a User has at most one Profile
    - skills is a JSON list of strings; social is a JSON object of links
    - experience/education are JSON lists of embedded entries, newest first,
      each carrying its own "_id"

Design Decisions:
    - JSON columns for sub-entries: they have no lifecycle outside the profile,
      so they live inside the row like an embedded document
    - user relationship eager-loaded (selectin): every read returns the owner's
      public name/avatar alongside the profile
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from devconnector.db.base import Base


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    company: Mapped[str | None] = mapped_column(String(200), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    status: Mapped[str] = mapped_column(String(200), nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    githubusername: Mapped[str | None] = mapped_column(
        String(100), nullable=True,
    )
    skills: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    social: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    experience: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    education: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship("User", lazy="selectin")

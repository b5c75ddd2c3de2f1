"""Profile Repository — upsert-by-user and embedded entry persistence."""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from devconnector.infrastructure.database import commit
from devconnector.models.profile import Profile

logger = logging.getLogger(__name__)


class ProfileRepository:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_all(self) -> list[Profile]:
        result = await self._db.execute(
            select(Profile).order_by(Profile.date.desc()),
        )
        return list(result.scalars().all())

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        result = await self._db.execute(
            select(Profile).where(Profile.user_id == user_id),
        )
        return result.scalar_one_or_none()

    async def upsert(self, user_id: UUID, fields: dict[str, Any]) -> Profile:
        """Create the user's profile, or overwrite the given fields on it."""
        profile = await self.get_by_user(user_id)
        if profile is None:
            profile = Profile(user_id=user_id, **fields)
            self._db.add(profile)
            logger.info("Profile created", extra={"user_id": str(user_id)})
        else:
            for name, value in fields.items():
                setattr(profile, name, value)
            logger.info("Profile updated", extra={"user_id": str(user_id)})
        return await self.save(profile)

    async def save(self, profile: Profile) -> Profile:
        await commit(self._db)
        await self._db.refresh(profile, attribute_names=["user"])
        return profile

    async def delete_by_user(self, user_id: UUID) -> None:
        """Stage deletion of the user's profile (committed by the caller)."""
        await self._db.execute(
            delete(Profile).where(Profile.user_id == user_id),
        )

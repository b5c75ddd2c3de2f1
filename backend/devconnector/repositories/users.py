"""User Repository — registration lookups and account removal."""

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from devconnector.infrastructure.database import commit
from devconnector.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def get(self, user_id: UUID) -> User | None:
        return await self._db.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        result = await self._db.execute(
            select(User).where(User.email == email),
        )
        return result.scalar_one_or_none()

    async def create(
        self, name: str, email: str, password_hash: str, avatar: str,
    ) -> User:
        user = User(
            name=name, email=email, password=password_hash, avatar=avatar,
        )
        self._db.add(user)
        await commit(self._db)
        await self._db.refresh(user)
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    async def delete(self, user_id: UUID) -> None:
        """Delete the user and commit.

        Deletes staged on the same session by other repositories (profile,
        posts) are committed in the same transaction.
        """
        await self._db.execute(delete(User).where(User.id == user_id))
        await commit(self._db)
        logger.info("User deleted", extra={"user_id": str(user_id)})

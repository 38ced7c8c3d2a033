import uuid
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from models.models import User


class UserRepo:
    def __init__(self, db):
        self.db = db

    async def get(self, user_id: uuid.UUID) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def exists(self, user_id: uuid.UUID) -> bool:
        count = await self.db.scalar(
            select(func.count(User.id)).where(User.id == user_id)
        )
        return bool(count)

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self.db.scalar(
            select(User).where(User.email == email.strip().lower())
        )

    async def find_by_username(self, username: str) -> Optional[User]:
        return await self.db.scalar(select(User).where(User.username == username))

    async def email_taken_by_other(self, email: str, user_id: uuid.UUID) -> bool:
        owner = await self.find_by_email(email)
        return owner is not None and owner.id != user_id

    async def save(self, user: User) -> User:
        """Insert or update ``user`` and return it refreshed from the store."""
        self.db.add(user)
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        await self.db.refresh(user)
        return user

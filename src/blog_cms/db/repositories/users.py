"""
blog_cms.db.repositories.users

Repository for `User` and `Profile` entities.
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from blog_cms.db.models import Profile, User


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self, *, email: str, password_hash: str, username: str, role: str
    ) -> User:
        user = User(email=email, password_hash=password_hash)
        self._session.add(user)
        await self._session.flush()
        self._session.add(Profile(user_id=user.id, username=username, role=role))
        await self._session.flush()
        return user

    async def get(self, user_id: uuid.UUID) -> User | None:
        return await self._session.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def profile_for(self, user_id: uuid.UUID) -> Profile | None:
        return await self._session.get(Profile, user_id)

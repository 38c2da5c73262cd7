"""
blog_cms.db.repositories.posts

Repository for `PostRow` entities.

Responsibilities:
- Create, fetch, list, patch and delete post rows within a caller-owned session.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy import asc, delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from blog_cms.db.models import PostRow


class PostRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, values: Mapping[str, Any]) -> PostRow:
        row = PostRow(**values)
        self._session.add(row)
        await self._session.flush()
        return row

    async def get(self, post_id: uuid.UUID) -> PostRow | None:
        return await self._session.get(PostRow, post_id)

    async def find(
        self,
        *,
        post_id: uuid.UUID | None = None,
        slug: str | None = None,
        published: bool | None = None,
        order_field: str = "created_at",
        descending: bool = True,
    ) -> list[PostRow]:
        stmt = select(PostRow)
        if post_id is not None:
            stmt = stmt.where(PostRow.id == post_id)
        if slug is not None:
            stmt = stmt.where(PostRow.slug == slug)
        if published is not None:
            stmt = stmt.where(PostRow.published.is_(published))
        column = getattr(PostRow, order_field)
        stmt = stmt.order_by(desc(column) if descending else asc(column))
        return list((await self._session.execute(stmt)).scalars().all())

    async def patch(self, post_id: uuid.UUID, values: Mapping[str, Any]) -> PostRow | None:
        # Last write wins: no version column, no row lock.
        row = await self._session.get(PostRow, post_id)
        if row is None:
            return None
        for key, value in values.items():
            setattr(row, key, value)
        await self._session.flush()
        return row

    async def delete(self, post_id: uuid.UUID) -> int:
        result = await self._session.execute(delete(PostRow).where(PostRow.id == post_id))
        return result.rowcount or 0

"""
blog_cms.store.sql

SQLAlchemy-backed `RecordStore`.

Responsibilities:
- Run each store operation in its own session + transaction.
- Convert ORM rows into detached `Post` values.
- Translate driver/ORM failures into `Err(STORE, ...)` with the store's own text.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blog_cms.core.result import Err, ErrorKind, Ok, Result
from blog_cms.db.models import PostRow
from blog_cms.db.repositories.posts import PostRepo
from blog_cms.observability.logging import get_logger
from blog_cms.store.ports import NEWEST_FIRST, WRITABLE_FIELDS, Post, PostFilter, PostOrder

log = get_logger(__name__)

POST_NOT_FOUND = "Post not found"


def to_post(row: PostRow) -> Post:
    return Post(
        id=row.id,
        title=row.title,
        slug=row.slug,
        content=row.content or "",
        excerpt=row.excerpt,
        cover_image=row.cover_image,
        published=bool(row.published),
        author_id=row.author_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _store_error(exc: SQLAlchemyError) -> Err:
    # Surface the driver message (e.g. the unique-constraint text) rather than the
    # SQLAlchemy wrapper, which embeds the full statement and parameters.
    detail = str(exc.orig) if isinstance(exc, DBAPIError) and exc.orig is not None else str(exc)
    return Err(ErrorKind.store, detail)


def _check_fields(fields: Mapping[str, Any]) -> Err | None:
    unknown = sorted(set(fields) - WRITABLE_FIELDS)
    if unknown:
        return Err(ErrorKind.store, f"Unknown post columns: {', '.join(unknown)}")
    return None


class SqlRecordStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def select(
        self, *, where: PostFilter | None = None, order_by: PostOrder | None = None
    ) -> Result[list[Post]]:
        where = where or PostFilter()
        order_by = order_by or NEWEST_FIRST
        try:
            async with self._session_factory() as session:
                rows = await PostRepo(session).find(
                    post_id=where.id,
                    slug=where.slug,
                    published=where.published,
                    order_field=order_by.field,
                    descending=order_by.descending,
                )
                return Ok([to_post(r) for r in rows])
        except SQLAlchemyError as e:
            log.error("store.select_failed", error=str(e))
            return _store_error(e)

    async def select_one(self, where: PostFilter) -> Result[Post]:
        result = await self.select(where=where)
        if isinstance(result, Err):
            return result
        if not result.value:
            return Err(ErrorKind.not_found, POST_NOT_FOUND)
        return Ok(result.value[0])

    async def insert(self, fields: Mapping[str, Any]) -> Result[Post]:
        bad = _check_fields(fields)
        if bad is not None:
            return bad
        try:
            async with self._session_factory() as session:
                row = await PostRepo(session).create(fields)
                await session.commit()
                return Ok(to_post(row))
        except SQLAlchemyError as e:
            log.warning("store.insert_failed", error=str(e))
            return _store_error(e)

    async def update(self, post_id: uuid.UUID, fields: Mapping[str, Any]) -> Result[Post]:
        bad = _check_fields(fields)
        if bad is not None:
            return bad
        try:
            async with self._session_factory() as session:
                row = await PostRepo(session).patch(post_id, fields)
                if row is None:
                    return Err(ErrorKind.not_found, POST_NOT_FOUND)
                await session.commit()
                return Ok(to_post(row))
        except SQLAlchemyError as e:
            log.warning("store.update_failed", post_id=str(post_id), error=str(e))
            return _store_error(e)

    async def delete(self, post_id: uuid.UUID) -> Result[None]:
        try:
            async with self._session_factory() as session:
                await PostRepo(session).delete(post_id)
                await session.commit()
                return Ok(None)
        except SQLAlchemyError as e:
            log.warning("store.delete_failed", post_id=str(post_id), error=str(e))
            return _store_error(e)


# --- Module Notes -----------------------------------------------------------
# Deleting an id that does not exist is a successful no-op, like a filtered DELETE.

"""
blog_cms.store.ports

Record store contract consumed by the controllers.

Responsibilities:
- Define the `Post` value handed out by any store (detached from ORM sessions).
- Define filter/order descriptors and the async `RecordStore` protocol.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal, Protocol

from blog_cms.core.result import Result

# Columns a caller may write through insert/update. `id` is always store-assigned.
WRITABLE_FIELDS = frozenset(
    {
        "title",
        "slug",
        "content",
        "excerpt",
        "cover_image",
        "published",
        "author_id",
        "created_at",
        "updated_at",
    }
)

OrderField = Literal["created_at", "updated_at", "title"]


@dataclass(frozen=True, slots=True)
class Post:
    id: uuid.UUID
    title: str
    slug: str
    content: str
    excerpt: str | None
    cover_image: str | None
    published: bool
    author_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class PostFilter:
    # Unset criteria do not constrain the query; set ones are AND-ed.
    id: uuid.UUID | None = None
    slug: str | None = None
    published: bool | None = None


@dataclass(frozen=True, slots=True)
class PostOrder:
    field: OrderField = "created_at"
    descending: bool = True


NEWEST_FIRST = PostOrder(field="created_at", descending=True)


class RecordStore(Protocol):
    async def select(
        self, *, where: PostFilter | None = None, order_by: PostOrder | None = None
    ) -> Result[list[Post]]: ...

    async def select_one(self, where: PostFilter) -> Result[Post]: ...

    async def insert(self, fields: Mapping[str, Any]) -> Result[Post]: ...

    async def update(self, post_id: uuid.UUID, fields: Mapping[str, Any]) -> Result[Post]: ...

    async def delete(self, post_id: uuid.UUID) -> Result[None]: ...


# --- Module Notes -----------------------------------------------------------
# Every method reports failure through `Err`; adapters must not let driver exceptions
# escape for expected conditions (missing rows, constraint violations, I/O errors).

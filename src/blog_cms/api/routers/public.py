"""
blog_cms.api.routers.public

Reader-facing endpoints; no authentication involved.

Responsibilities:
- List published posts (newest first).
- Serve one published post by slug, rendered; anything else is 404.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from blog_cms.api.deps import store_dep
from blog_cms.api.errors import raise_for_err
from blog_cms.api.schemas import RenderedPostOut
from blog_cms.core.result import Err
from blog_cms.posts.reader import PublicPostReader
from blog_cms.store.ports import RecordStore

router = APIRouter(tags=["public"])


class PostSummary(BaseModel):
    id: uuid.UUID
    title: str
    slug: str
    excerpt: str | None
    cover_image: str | None
    created_at: datetime


class PostDetail(BaseModel):
    slug: str
    created_at: datetime
    rendered: RenderedPostOut


@router.get("/", response_model=list[PostSummary])
async def list_published(store: RecordStore = Depends(store_dep)) -> list[PostSummary]:
    result = await PublicPostReader(store).published()
    if isinstance(result, Err):
        raise_for_err(result)
    return [
        PostSummary(
            id=p.id,
            title=p.title,
            slug=p.slug,
            excerpt=p.excerpt,
            cover_image=p.cover_image,
            created_at=p.created_at,
        )
        for p in result.value
    ]


@router.get("/post/{slug}", response_model=PostDetail)
async def get_published(slug: str, store: RecordStore = Depends(store_dep)) -> PostDetail:
    result = await PublicPostReader(store).rendered(slug)
    if isinstance(result, Err):
        raise_for_err(result)
    post, view = result.value
    return PostDetail(
        slug=post.slug,
        created_at=post.created_at,
        rendered=RenderedPostOut.from_rendered(view),
    )

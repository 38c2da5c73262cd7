"""
blog_cms.api.schemas

Response/request bodies shared by more than one router.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel

from blog_cms.rendering.markdown import RenderedPost
from blog_cms.store.ports import Post


class PostOut(BaseModel):
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

    @classmethod
    def from_post(cls, post: Post) -> PostOut:
        return cls(
            id=post.id,
            title=post.title,
            slug=post.slug,
            content=post.content,
            excerpt=post.excerpt,
            cover_image=post.cover_image,
            published=post.published,
            author_id=post.author_id,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class RenderedPostOut(BaseModel):
    title: str
    excerpt: str | None
    cover_image: str | None
    content_html: str

    @classmethod
    def from_rendered(cls, view: RenderedPost) -> RenderedPostOut:
        return cls(
            title=view.title,
            excerpt=view.excerpt,
            cover_image=view.cover_image,
            content_html=view.content_html,
        )

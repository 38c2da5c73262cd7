"""
blog_cms.posts.reader

Anonymous read access to the blog.

Responsibilities:
- List published posts, newest first.
- Fetch one published post by slug; drafts are indistinguishable from missing posts.
"""

from __future__ import annotations

from blog_cms.core.result import Err, ErrorKind, Ok, Result
from blog_cms.observability.logging import get_logger
from blog_cms.rendering.markdown import RenderedPost, render_post
from blog_cms.store.ports import NEWEST_FIRST, Post, PostFilter, RecordStore

log = get_logger(__name__)


class PublicPostReader:
    def __init__(self, store: RecordStore) -> None:
        self._store = store

    async def published(self) -> Result[list[Post]]:
        result = await self._store.select(where=PostFilter(published=True), order_by=NEWEST_FIRST)
        if isinstance(result, Err):
            log.error("post.public_list_failed", detail=result.detail)
        return result

    async def by_slug(self, slug: str) -> Result[Post]:
        result = await self._store.select_one(PostFilter(slug=slug, published=True))
        if isinstance(result, Err):
            if result.kind is not ErrorKind.not_found:
                log.error("post.public_fetch_failed", slug=slug, detail=result.detail)
            return Err(ErrorKind.not_found, "Post not found")
        return result

    async def rendered(self, slug: str) -> Result[tuple[Post, RenderedPost]]:
        result = await self.by_slug(slug)
        if isinstance(result, Err):
            return result
        post = result.value
        view = render_post(
            title=post.title,
            excerpt=post.excerpt,
            cover_image=post.cover_image,
            content=post.content,
        )
        return Ok((post, view))

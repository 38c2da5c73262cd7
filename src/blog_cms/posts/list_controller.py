"""
blog_cms.posts.list_controller

Admin post collection: load, publish toggle, delete.

Responsibilities:
- Hold the newest-first list of all posts (drafts included).
- Apply mutations to the held list only after the store confirms them.
- Report toggle failures to the log only; report delete failures to the user.
"""

from __future__ import annotations

import uuid
from dataclasses import replace

from blog_cms.core.result import Err, ErrorKind, Ok, Result
from blog_cms.navigation import Confirmer, Notifier
from blog_cms.observability.logging import get_logger
from blog_cms.store.ports import NEWEST_FIRST, Post, RecordStore

log = get_logger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this post?"
DELETE_FAILED = "Failed to delete post"


class PostListController:
    def __init__(self, *, store: RecordStore, confirmer: Confirmer, notifier: Notifier) -> None:
        self._store = store
        self._confirmer = confirmer
        self._notifier = notifier

        self.posts: list[Post] = []
        self.is_loading = True
        # (action, post id) pairs with a request in flight.
        self._in_flight: set[tuple[str, uuid.UUID]] = set()

    async def load(self) -> Result[list[Post]]:
        result = await self._store.select(order_by=NEWEST_FIRST)
        self.is_loading = False
        if isinstance(result, Err):
            log.error("post.list_load_failed", detail=result.detail)
            return result
        self.posts = list(result.value)
        return result

    def is_pending(self, action: str, post_id: uuid.UUID) -> bool:
        return (action, post_id) in self._in_flight

    async def toggle_publish(self, post: Post) -> Result[Post]:
        key = ("toggle_publish", post.id)
        if key in self._in_flight:
            return Err(ErrorKind.busy, "Publish change already in progress")

        flipped = not post.published
        self._in_flight.add(key)
        try:
            result = await self._store.update(post.id, {"published": flipped})
        finally:
            self._in_flight.discard(key)

        if isinstance(result, Err):
            # No user-facing notice on this path; the row keeps its old badge.
            log.error(
                "post.publish_toggle_failed",
                post_id=str(post.id),
                kind=result.kind.value,
                detail=result.detail,
            )
            return result

        self.posts = [replace(p, published=flipped) if p.id == post.id else p for p in self.posts]
        log.info("post.publish_toggled", post_id=str(post.id), published=flipped)
        return Ok(result.value)

    async def delete(self, post: Post) -> Result[None]:
        key = ("delete", post.id)
        if key in self._in_flight:
            return Err(ErrorKind.busy, "Delete already in progress")

        if not await self._confirmer.confirm(DELETE_PROMPT):
            return Err(ErrorKind.cancelled, "Delete cancelled")

        self._in_flight.add(key)
        try:
            result = await self._store.delete(post.id)
        finally:
            self._in_flight.discard(key)

        if isinstance(result, Err):
            log.error(
                "post.delete_failed",
                post_id=str(post.id),
                kind=result.kind.value,
                detail=result.detail,
            )
            self._notifier.notify(DELETE_FAILED)
            return result

        self.posts = [p for p in self.posts if p.id != post.id]
        log.info("post.deleted", post_id=str(post.id))
        return result

    def find(self, post_id: uuid.UUID) -> Post | None:
        return next((p for p in self.posts if p.id == post_id), None)


# --- Module Notes -----------------------------------------------------------
# Toggle failures are log-only; delete failures also raise a user notice.

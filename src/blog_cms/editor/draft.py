"""
blog_cms.editor.draft

Typed editor field state and its validation.

Responsibilities:
- Hold the raw, editable field values (`PostDraft`).
- Validate a draft into a normalized `PostRecord` or a single `Invalid` reason.
- Produce the insert/update column sets from a validated record.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Union

from blog_cms.auth.models import Identity
from blog_cms.store.ports import Post

MUST_BE_LOGGED_IN = "You must be logged in"
TITLE_REQUIRED = "Title is required"
SLUG_REQUIRED = "Slug is required"


@dataclass(slots=True)
class PostDraft:
    title: str = ""
    slug: str = ""
    content: str = ""
    excerpt: str = ""
    cover_image: str = ""
    published: bool = False

    @classmethod
    def from_post(cls, post: Post) -> PostDraft:
        return cls(
            title=post.title,
            slug=post.slug,
            content=post.content,
            excerpt=post.excerpt or "",
            cover_image=post.cover_image or "",
            published=post.published,
        )


@dataclass(frozen=True, slots=True)
class PostRecord:
    author_id: uuid.UUID
    title: str
    slug: str
    content: str
    excerpt: str | None
    cover_image: str | None
    published: bool

    def _columns(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "slug": self.slug,
            "content": self.content,
            "excerpt": self.excerpt,
            "cover_image": self.cover_image,
            "published": self.published,
        }

    def insert_fields(self, now: datetime) -> dict[str, Any]:
        return {
            **self._columns(),
            "author_id": self.author_id,
            "created_at": now,
            "updated_at": now,
        }

    def update_fields(self, now: datetime) -> dict[str, Any]:
        # author_id and created_at are fixed at creation.
        return {**self._columns(), "updated_at": now}


@dataclass(frozen=True, slots=True)
class Valid:
    record: PostRecord


@dataclass(frozen=True, slots=True)
class Invalid:
    field: str
    reason: str


Validation = Union[Valid, Invalid]


def validate_draft(draft: PostDraft, identity: Identity | None) -> Validation:
    # Order matters: the first failing check is the one reported.
    if identity is None:
        return Invalid(field="identity", reason=MUST_BE_LOGGED_IN)
    title = draft.title.strip()
    if not title:
        return Invalid(field="title", reason=TITLE_REQUIRED)
    slug = draft.slug.strip()
    if not slug:
        return Invalid(field="slug", reason=SLUG_REQUIRED)
    return Valid(
        PostRecord(
            author_id=identity.user_id,
            title=title,
            slug=slug,
            content=draft.content or "",
            excerpt=draft.excerpt.strip() or None,
            cover_image=draft.cover_image.strip() or None,
            published=draft.published,
        )
    )

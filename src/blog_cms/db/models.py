"""
blog_cms.db.models

Persistence schema for the blog.

Responsibilities:
- Provide the declarative base (with stable constraint names).
- Define ORM models:
  - User: sign-in credentials
  - Profile: display name and role (the admin capability lives here)
  - PostRow: persisted blog post
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, MetaData, String, Text, Uuid as SAUuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from blog_cms.core.clock import utcnow

ADMIN_ROLE = "admin"

# Named constraints make driver errors point at a recognizable name (e.g. `uq_posts_slug`).
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)


class Profile(Base):
    __tablename__ = "profiles"

    user_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    username: Mapped[str] = mapped_column(String(128), nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False, default="author")

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


class PostRow(Base):
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    # Uniqueness is the store's job; the editor only guarantees non-empty.
    slug: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_image: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    author_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)

    __table_args__ = (Index("ix_posts_published_created", "published", "created_at"),)


# --- Module Notes -----------------------------------------------------------
# `updated_at` has no ORM onupdate hook: the editor sets it explicitly on every save
# and a publish toggle leaves it untouched, matching the authoring workflow.

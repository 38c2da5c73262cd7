"""
tests.conftest

Shared fakes and fixtures.

Responsibilities:
- In-memory `RecordStore` with failure/crash injection and a call log.
- In-memory `AuthBackend`.
- Helpers to build a signed-in `AuthSession`.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any

import pytest
import pytest_asyncio

from blog_cms.auth.jwt import JwtConfig
from blog_cms.auth.models import Identity, Profile
from blog_cms.auth.session import AuthSession
from blog_cms.core.result import Err, ErrorKind, Ok, Result
from blog_cms.store.ports import Post, PostFilter, PostOrder

TEST_SECRET = "test-secret-that-is-long-enough-for-hs256"
DUPLICATE_SLUG = 'duplicate key value violates unique constraint "posts_slug_key"'


class InMemoryRecordStore:
    def __init__(self) -> None:
        self.rows: dict[uuid.UUID, Post] = {}
        self.calls: list[str] = []
        self._failures: dict[str, Err] = {}
        self._crashes: dict[str, Exception] = {}
        # When set, every operation waits on it (to observe in-flight states).
        self.gate: asyncio.Event | None = None
        self.entered = asyncio.Event()

    # -- test helpers ----------------------------------------------------------

    def fail(self, op: str, detail: str, kind: ErrorKind = ErrorKind.store) -> None:
        self._failures[op] = Err(kind, detail)

    def crash(self, op: str, exc: Exception) -> None:
        self._crashes[op] = exc

    def add(self, **overrides: Any) -> Post:
        created = overrides.pop("created_at", datetime(2024, 1, 1, 12, 0, 0))
        post = Post(
            id=overrides.pop("id", uuid.uuid4()),
            title=overrides.pop("title", "A post"),
            slug=overrides.pop("slug", f"a-post-{len(self.rows)}"),
            content=overrides.pop("content", ""),
            excerpt=overrides.pop("excerpt", None),
            cover_image=overrides.pop("cover_image", None),
            published=overrides.pop("published", False),
            author_id=overrides.pop("author_id", uuid.uuid4()),
            created_at=created,
            updated_at=overrides.pop("updated_at", created),
        )
        assert not overrides, overrides
        self.rows[post.id] = post
        return post

    async def _enter(self, op: str) -> Err | None:
        self.calls.append(op)
        self.entered.set()
        if self.gate is not None:
            await self.gate.wait()
        if op in self._crashes:
            raise self._crashes.pop(op)
        return self._failures.pop(op, None)

    # -- RecordStore -----------------------------------------------------------

    async def select(
        self, *, where: PostFilter | None = None, order_by: PostOrder | None = None
    ) -> Result[list[Post]]:
        failed = await self._enter("select")
        if failed is not None:
            return failed
        where = where or PostFilter()
        rows = [
            p
            for p in self.rows.values()
            if (where.id is None or p.id == where.id)
            and (where.slug is None or p.slug == where.slug)
            and (where.published is None or p.published == where.published)
        ]
        order_by = order_by or PostOrder()
        rows.sort(key=lambda p: getattr(p, order_by.field), reverse=order_by.descending)
        return Ok(rows)

    async def select_one(self, where: PostFilter) -> Result[Post]:
        result = await self.select(where=where)
        if isinstance(result, Err):
            return result
        if not result.value:
            return Err(ErrorKind.not_found, "Post not found")
        return Ok(result.value[0])

    async def insert(self, fields: Mapping[str, Any]) -> Result[Post]:
        failed = await self._enter("insert")
        if failed is not None:
            return failed
        if any(p.slug == fields["slug"] for p in self.rows.values()):
            return Err(ErrorKind.store, DUPLICATE_SLUG)
        post = Post(id=uuid.uuid4(), **fields)
        self.rows[post.id] = post
        return Ok(post)

    async def update(self, post_id: uuid.UUID, fields: Mapping[str, Any]) -> Result[Post]:
        failed = await self._enter("update")
        if failed is not None:
            return failed
        current = self.rows.get(post_id)
        if current is None:
            return Err(ErrorKind.not_found, "Post not found")
        slug = fields.get("slug")
        if slug is not None and any(
            p.slug == slug and p.id != post_id for p in self.rows.values()
        ):
            return Err(ErrorKind.store, DUPLICATE_SLUG)
        updated = replace(current, **fields)
        self.rows[post_id] = updated
        return Ok(updated)

    async def delete(self, post_id: uuid.UUID) -> Result[None]:
        failed = await self._enter("delete")
        if failed is not None:
            return failed
        self.rows.pop(post_id, None)
        return Ok(None)


class FakeAuthBackend:
    def __init__(self) -> None:
        self._credentials: dict[str, tuple[Identity, str]] = {}
        self._profiles: dict[uuid.UUID, Profile] = {}
        self.sign_outs = 0

    def add_user(
        self,
        email: str,
        password: str,
        *,
        username: str = "author",
        is_admin: bool = False,
        with_profile: bool = True,
    ) -> Identity:
        identity = Identity(user_id=uuid.uuid4(), email=email)
        self._credentials[email] = (identity, password)
        if with_profile:
            self._profiles[identity.user_id] = Profile(username=username, is_admin=is_admin)
        return identity

    async def sign_in(self, email: str, password: str) -> Result[Identity]:
        entry = self._credentials.get(email)
        if entry is None or entry[1] != password:
            return Err(ErrorKind.auth, "Invalid login credentials")
        return Ok(entry[0])

    async def sign_out(self) -> Result[None]:
        self.sign_outs += 1
        return Ok(None)

    async def identity_for(self, user_id: uuid.UUID) -> Result[Identity]:
        for identity, _ in self._credentials.values():
            if identity.user_id == user_id:
                return Ok(identity)
        return Err(ErrorKind.not_found, "User not found")

    async def profile_for(self, user_id: uuid.UUID) -> Result[Profile]:
        profile = self._profiles.get(user_id)
        if profile is None:
            return Err(ErrorKind.not_found, "Profile not found")
        return Ok(profile)


class FixedClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def jwt_cfg() -> JwtConfig:
    return JwtConfig(alg="HS256", issuer="blog-cms", audience="blog-cms-admin", secret=TEST_SECRET)


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def backend() -> FakeAuthBackend:
    b = FakeAuthBackend()
    b.add_user("admin@blog.test", "s3cret", username="avinash", is_admin=True)
    b.add_user("reader@blog.test", "reader-pass", username="reader", is_admin=False)
    return b


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2025, 3, 1, 9, 30, 0))


@pytest.fixture
def new_session(backend: FakeAuthBackend, jwt_cfg: JwtConfig):
    def _make() -> AuthSession:
        return AuthSession(backend=backend, jwt_cfg=jwt_cfg)

    return _make


@pytest_asyncio.fixture
async def admin_session(new_session) -> AuthSession:
    session = new_session()
    await session.sign_in("admin@blog.test", "s3cret")
    return session

"""
blog_cms.db.init_db

Dev/test database bootstrap.

Responsibilities:
- Create the blog tables when they are missing.
- Seed the single author account from settings so a fresh database can be signed into.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from blog_cms.auth.backend import SqlAuthBackend
from blog_cms.core.result import Err
from blog_cms.db.models import Base
from blog_cms.observability.logging import get_logger
from blog_cms.settings import Settings

log = get_logger(__name__)


async def init_db(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_admin(backend: SqlAuthBackend, settings: Settings) -> None:
    """
    Create the admin account named by `BLOG_BOOTSTRAP_ADMIN_*`, if configured.

    An existing account with that email is left untouched (password included).
    """

    if not settings.bootstrap_admin_email or not settings.bootstrap_admin_password:
        return
    result = await backend.create_user(
        email=settings.bootstrap_admin_email,
        password=settings.bootstrap_admin_password,
        username=settings.bootstrap_admin_username,
        is_admin=True,
    )
    if isinstance(result, Err):
        # Normal on restart: the account already exists.
        log.info("bootstrap_admin.skipped", detail=result.detail)
    else:
        log.info("bootstrap_admin.created", user_id=str(result.value.user_id))

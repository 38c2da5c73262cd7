"""
blog_cms.db.session

Engine and session factory for the blog database.

Responsibilities:
- Build the async engine from `Settings.database_url`.
- Turn on foreign-key enforcement for SQLite, which ships with it off.
- Build the sessionmaker the store and auth adapters open per operation.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from blog_cms.settings import Settings


def _enforce_sqlite_foreign_keys(dbapi_connection: Any, _: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(settings: Settings) -> AsyncEngine:
    url = make_url(settings.database_url)
    engine = create_async_engine(url, pool_pre_ping=True)
    if url.get_backend_name() == "sqlite":
        # Posts reference their author; a dangling author_id must fail like it would on Postgres.
        event.listen(engine.sync_engine, "connect", _enforce_sqlite_foreign_keys)
    return engine


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Adapters read row attributes after commit to build detached values.
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


# --- Module Notes -----------------------------------------------------------
# Sessions are opened per store/backend call (see `blog_cms.store.sql`), never per
# controller, so a controller never holds a live session across awaits it does not own.

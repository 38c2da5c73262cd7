"""
blog_cms.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions and the shared collaborators
  (record store, auth backend, route guard) built at startup.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from blog_cms.auth.backend import AuthBackend
from blog_cms.auth.guard import RouteGuard
from blog_cms.settings import Settings
from blog_cms.store.ports import RecordStore


def settings_dep(request: Request) -> Settings:
    # The app is built around one Settings instance; tests pass their own to create_app.
    return request.app.state.settings  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


def store_dep(request: Request) -> RecordStore:
    return request.app.state.store  # type: ignore[attr-defined]


def auth_backend_dep(request: Request) -> AuthBackend:
    return request.app.state.auth_backend  # type: ignore[attr-defined]


def guard_dep(request: Request) -> RouteGuard:
    return request.app.state.guard  # type: ignore[attr-defined]


# --- Module Notes -----------------------------------------------------------
# Controllers are never shared: routers build a fresh PostEditorController /
# PostListController per request from these dependencies.

"""
blog_cms.api.app

FastAPI app factory for the blog CMS.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Initialize and dispose shared infrastructure (DB engine, record store, auth backend).
- Render guard redirects.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_303_SEE_OTHER

from blog_cms import __version__
from blog_cms.api.routers.admin_posts import router as admin_posts_router
from blog_cms.api.routers.auth import router as auth_router
from blog_cms.api.routers.dashboard import router as dashboard_router
from blog_cms.api.routers.health import router as health_router
from blog_cms.api.routers.public import router as public_router
from blog_cms.auth.backend import SqlAuthBackend
from blog_cms.auth.deps import GuardRedirect
from blog_cms.auth.guard import RouteGuard
from blog_cms.db.init_db import init_db, seed_admin
from blog_cms.db.session import create_engine, create_sessionmaker
from blog_cms.observability.logging import configure_logging, get_logger
from blog_cms.observability.middleware import RequestContextMiddleware
from blog_cms.settings import Settings
from blog_cms.store.sql import SqlRecordStore

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        sessionmaker = create_sessionmaker(engine)
        app.state.engine = engine
        app.state.sessionmaker = sessionmaker
        app.state.store = SqlRecordStore(sessionmaker)
        app.state.auth_backend = SqlAuthBackend(sessionmaker)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables and the author account automatically.
            await init_db(engine)
            await seed_admin(app.state.auth_backend, settings)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Blog CMS",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.guard = RouteGuard(login_path=settings.login_path, home_path=settings.home_path)

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(public_router)
    app.include_router(auth_router)
    app.include_router(dashboard_router)
    app.include_router(admin_posts_router)

    @app.exception_handler(GuardRedirect)
    async def _guard_redirect(request: Request, exc: GuardRedirect) -> JSONResponse:
        decision = exc.decision
        location = decision.to
        if decision.return_to:
            location = f"{location}?{urlencode({'next': decision.return_to})}"
        log.info("guard.redirect", to=decision.to, return_to=decision.return_to)
        return JSONResponse(
            status_code=HTTP_303_SEE_OTHER,
            content={
                "redirect_to": decision.to,
                "return_to": decision.return_to,
                "replace": decision.replace,
            },
            headers={"Location": location},
        )

    return app


# --- Module Notes -----------------------------------------------------------
# Composition root: every collaborator a controller needs is created here once and
# handed out through `blog_cms.api.deps`; no module keeps global mutable state.

"""
blog_cms.auth.deps

FastAPI dependency functions for authentication and route gating.

Responsibilities:
- Build and resolve a per-request `AuthSession` from the bearer token or session cookie.
- Apply the `RouteGuard` through a reusable dependency factory.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from blog_cms.api.deps import auth_backend_dep, guard_dep, settings_dep
from blog_cms.auth.backend import AuthBackend
from blog_cms.auth.guard import Capability, Redirect, RouteGuard, Suspend
from blog_cms.auth.jwt import JwtConfig
from blog_cms.auth.models import Authenticated
from blog_cms.auth.session import AuthSession
from blog_cms.observability.logging import bind_identity
from blog_cms.settings import Settings

_bearer = HTTPBearer(auto_error=False)


class GuardRedirect(Exception):
    """
    Raised by guarded dependencies; rendered as a 303 by the app's exception handler.
    """

    def __init__(self, decision: Redirect) -> None:
        super().__init__(decision.to)
        self.decision = decision


def _carried_token(
    request: Request, creds: HTTPAuthorizationCredentials | None, settings: Settings
) -> str | None:
    # An explicit Authorization header wins over the browser cookie.
    if creds is not None and creds.credentials:
        return creds.credentials
    return request.cookies.get(settings.session_cookie_name)


async def get_auth_session(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
    backend: AuthBackend = Depends(auth_backend_dep),
) -> AuthSession:
    session = AuthSession(backend=backend, jwt_cfg=JwtConfig.from_settings(settings))
    state = await session.resolve(_carried_token(request, creds, settings))
    if isinstance(state, Authenticated):
        bind_identity(str(state.identity.user_id), is_admin=state.is_admin)
    return session


def _location(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def require(capability: Capability):
    def _dep(
        request: Request,
        session: AuthSession = Depends(get_auth_session),
        guard: RouteGuard = Depends(guard_dep),
    ) -> AuthSession:
        decision = guard.evaluate(
            state=session.current(), capability=capability, location=_location(request)
        )
        if isinstance(decision, Redirect):
            raise GuardRedirect(decision)
        if isinstance(decision, Suspend):
            # get_auth_session always resolves first, so this only fires on a wiring bug.
            raise HTTPException(
                status_code=HTTP_503_SERVICE_UNAVAILABLE,
                detail=decision.placeholder,
                headers={"Retry-After": "1"},
            )
        return session

    return _dep


# --- Module Notes -----------------------------------------------------------
# FastAPI caches `get_auth_session` per request, so the guard and the endpoint see the
# same AuthSession instance.

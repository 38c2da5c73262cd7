"""
blog_cms.api.routers.auth

Sign-in / sign-out endpoints.

Responsibilities:
- Exchange credentials for a session token (JSON + cookie).
- Send the user back to the location the guard carried, if any.
- Clear the session on sign-out.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_500_INTERNAL_SERVER_ERROR

from blog_cms.api.deps import settings_dep
from blog_cms.api.errors import raise_for_err
from blog_cms.auth.deps import get_auth_session, require
from blog_cms.auth.guard import Capability, resolve_return_to
from blog_cms.auth.models import Authenticated
from blog_cms.auth.session import AuthSession
from blog_cms.core.result import Err
from blog_cms.settings import Settings

router = APIRouter(prefix="/admin", tags=["auth"])


class LoginRequest(BaseModel):
    email: str = Field(min_length=1, max_length=320)
    password: str = Field(min_length=1)
    # Location carried by the guard redirect (`?next=` on the login URL).
    next: str | None = None


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    redirect_to: str
    is_admin: bool
    username: str | None = None


class LoginPage(BaseModel):
    next: str


class NavigationResponse(BaseModel):
    redirect_to: str


class MeResponse(BaseModel):
    user_id: uuid.UUID
    email: str
    username: str | None
    is_admin: bool


@router.get("/login", response_model=LoginPage)
async def login_page(next: str | None = None, settings: Settings = Depends(settings_dep)) -> LoginPage:
    return LoginPage(next=resolve_return_to(next, default=settings.admin_home_path))


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    response: Response,
    session: AuthSession = Depends(get_auth_session),
    settings: Settings = Depends(settings_dep),
) -> LoginResponse:
    result = await session.sign_in(body.email, body.password)
    if isinstance(result, Err):
        raise_for_err(result)

    token = session.token
    if token is None:
        # sign_in returned Ok without issuing a token: a wiring bug, not a client error.
        raise HTTPException(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail="Session not issued"
        )
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_ttl_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.env == "prod",
    )
    state = result.value
    return LoginResponse(
        access_token=token,
        redirect_to=resolve_return_to(body.next, default=settings.admin_home_path),
        is_admin=state.is_admin,
        username=state.username,
    )


@router.post("/logout", response_model=NavigationResponse)
async def logout(
    response: Response,
    session: AuthSession = Depends(get_auth_session),
    settings: Settings = Depends(settings_dep),
) -> NavigationResponse:
    await session.sign_out()
    response.delete_cookie(settings.session_cookie_name)
    return NavigationResponse(redirect_to=settings.login_path)


@router.get("/me", response_model=MeResponse)
async def me(
    session: AuthSession = Depends(require(Capability.require_authenticated)),
) -> MeResponse:
    state = session.current()
    if not isinstance(state, Authenticated):
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Not signed in")
    return MeResponse(
        user_id=state.identity.user_id,
        email=state.identity.email,
        username=state.username,
        is_admin=state.is_admin,
    )

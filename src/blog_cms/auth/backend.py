"""
blog_cms.auth.backend

Credential and profile backend consumed by `AuthSession`.

Responsibilities:
- Verify email/password pairs against stored werkzeug password hashes.
- Look up the profile (username + role) for an identity.
- Create accounts for dev/test bootstrapping.
"""

from __future__ import annotations

import uuid
from typing import Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from werkzeug.security import check_password_hash, generate_password_hash

from blog_cms.auth.models import Identity, Profile
from blog_cms.core.result import Err, ErrorKind, Ok, Result
from blog_cms.db.models import ADMIN_ROLE
from blog_cms.db.repositories.users import UserRepo
from blog_cms.observability.logging import get_logger

log = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid login credentials"


class AuthBackend(Protocol):
    async def sign_in(self, email: str, password: str) -> Result[Identity]: ...

    async def sign_out(self) -> Result[None]: ...

    async def identity_for(self, user_id: uuid.UUID) -> Result[Identity]: ...

    async def profile_for(self, user_id: uuid.UUID) -> Result[Profile]: ...


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class SqlAuthBackend:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def sign_in(self, email: str, password: str) -> Result[Identity]:
        if not email or not email.strip() or not password:
            return Err(ErrorKind.auth, INVALID_CREDENTIALS)
        try:
            async with self._session_factory() as session:
                user = await UserRepo(session).get_by_email(_normalize_email(email))
        except SQLAlchemyError as e:
            log.error("auth.backend_failed", error=str(e))
            return Err(ErrorKind.store, str(e))

        # Same message for unknown email and wrong password.
        if user is None or not check_password_hash(user.password_hash, password):
            return Err(ErrorKind.auth, INVALID_CREDENTIALS)
        return Ok(Identity(user_id=user.id, email=user.email))

    async def sign_out(self) -> Result[None]:
        # Tokens are self-contained; there is no server-side session row to revoke.
        return Ok(None)

    async def identity_for(self, user_id: uuid.UUID) -> Result[Identity]:
        try:
            async with self._session_factory() as session:
                user = await UserRepo(session).get(user_id)
        except SQLAlchemyError as e:
            log.error("auth.backend_failed", error=str(e))
            return Err(ErrorKind.store, str(e))
        if user is None:
            return Err(ErrorKind.not_found, "User not found")
        return Ok(Identity(user_id=user.id, email=user.email))

    async def profile_for(self, user_id: uuid.UUID) -> Result[Profile]:
        try:
            async with self._session_factory() as session:
                profile = await UserRepo(session).profile_for(user_id)
        except SQLAlchemyError as e:
            log.error("auth.backend_failed", error=str(e))
            return Err(ErrorKind.store, str(e))
        if profile is None:
            return Err(ErrorKind.not_found, "Profile not found")
        return Ok(Profile(username=profile.username, is_admin=profile.is_admin))

    async def create_user(
        self,
        *,
        email: str,
        password: str,
        username: str,
        is_admin: bool = False,
    ) -> Result[Identity]:
        if not email.strip() or not password or not username.strip():
            return Err(ErrorKind.validation, "Missing fields")
        try:
            async with self._session_factory() as session:
                user = await UserRepo(session).create(
                    email=_normalize_email(email),
                    password_hash=generate_password_hash(password),
                    username=username.strip(),
                    role=ADMIN_ROLE if is_admin else "author",
                )
                await session.commit()
                return Ok(Identity(user_id=user.id, email=user.email))
        except IntegrityError:
            return Err(ErrorKind.store, "Email already registered")
        except SQLAlchemyError as e:
            log.error("auth.backend_failed", error=str(e))
            return Err(ErrorKind.store, str(e))


# --- Module Notes -----------------------------------------------------------
# `create_user` is only reached from the dev/test bootstrap in `api.app` and from
# tests; the HTTP surface has no self-registration.

"""
blog_cms.auth.session

Per-browsing-session identity holder.

Responsibilities:
- Track the `Resolving -> Anonymous | Authenticated` lifecycle.
- Sign in / sign out through an `AuthBackend`.
- Derive the admin capability from the profile lookup, never from the client.
"""

from __future__ import annotations

import uuid

from blog_cms.auth.backend import AuthBackend
from blog_cms.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate, issue_token
from blog_cms.auth.models import (
    ANONYMOUS,
    RESOLVING,
    Authenticated,
    AuthState,
    Identity,
    Resolving,
)
from blog_cms.core.result import Err, ErrorKind, Ok, Result
from blog_cms.observability.logging import get_logger

log = get_logger(__name__)


class AuthSession:
    def __init__(self, *, backend: AuthBackend, jwt_cfg: JwtConfig) -> None:
        self._backend = backend
        self._jwt_cfg = jwt_cfg
        self._state: AuthState = RESOLVING
        self._token: str | None = None

    def current(self) -> AuthState:
        return self._state

    @property
    def token(self) -> str | None:
        return self._token

    def acting_identity(self) -> Identity | None:
        state = self._state
        if isinstance(state, Authenticated):
            return state.identity
        return None

    async def resolve(self, token: str | None) -> AuthState:
        """
        First session check: turn a carried session token into a state.

        Any token problem (missing, malformed, expired, unknown user) resolves to
        Anonymous; the caller never sees an error from this path.
        """

        if not token:
            self._set_anonymous()
            return self._state

        try:
            claims = decode_and_validate(cfg=self._jwt_cfg, token=token)
            user_id = uuid.UUID(str(claims["sub"]))
        except (JwtValidationError, ValueError) as e:
            log.info("auth.session_token_rejected", reason=str(e))
            self._set_anonymous()
            return self._state

        identity = await self._backend.identity_for(user_id)
        if isinstance(identity, Err):
            log.info("auth.session_user_missing", user_id=str(user_id), reason=identity.detail)
            self._set_anonymous()
            return self._state

        self._state = await self._authenticated(identity.value)
        self._token = token
        return self._state

    async def sign_in(self, email: str, password: str) -> Result[Authenticated]:
        result = await self._backend.sign_in(email, password)
        if isinstance(result, Err):
            log.info("auth.sign_in_failed", kind=result.kind.value)
            if isinstance(self._state, Resolving):
                self._set_anonymous()
            return result

        state = await self._authenticated(result.value)
        self._state = state
        self._token = issue_token(
            cfg=self._jwt_cfg,
            subject=str(state.identity.user_id),
            email=state.identity.email,
        )
        log.info("auth.signed_in", user_id=str(state.identity.user_id), is_admin=state.is_admin)
        return Ok(state)

    async def sign_out(self) -> None:
        result = await self._backend.sign_out()
        if isinstance(result, Err):
            # Local state is cleared regardless of what the backend reports.
            log.warning("auth.sign_out_backend_failed", detail=result.detail)
        self._set_anonymous()
        log.info("auth.signed_out")

    async def _authenticated(self, identity: Identity) -> Authenticated:
        profile = await self._backend.profile_for(identity.user_id)
        if isinstance(profile, Err):
            if profile.kind is not ErrorKind.not_found:
                log.warning(
                    "auth.profile_lookup_failed",
                    user_id=str(identity.user_id),
                    detail=profile.detail,
                )
            return Authenticated(identity=identity, is_admin=False)
        return Authenticated(
            identity=identity,
            is_admin=profile.value.is_admin,
            username=profile.value.username,
        )

    def _set_anonymous(self) -> None:
        self._state = ANONYMOUS
        self._token = None


# --- Module Notes -----------------------------------------------------------
# One AuthSession per browsing session (per HTTP request in the API layer). The
# token is the only thing that outlives it.

"""
blog_cms.auth.guard

Access gate evaluated before any protected view renders.

Responsibilities:
- Map (session state, requested capability, location) to a single decision.
- Recover the originally requested location after a successful sign-in.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union
from urllib.parse import urlsplit

from blog_cms.auth.models import Anonymous, Authenticated, AuthState, Resolving


class Capability(enum.StrEnum):
    public = "PUBLIC"
    require_authenticated = "REQUIRE_AUTHENTICATED"
    require_admin = "REQUIRE_ADMIN"


@dataclass(frozen=True, slots=True)
class Suspend:
    """
    Session not resolved yet: show the loading placeholder and decide nothing.
    """

    placeholder: str = "Loading..."


@dataclass(frozen=True, slots=True)
class Render:
    pass


@dataclass(frozen=True, slots=True)
class Redirect:
    to: str
    replace: bool = True
    # Location the user originally asked for; only set on redirects to login.
    return_to: str | None = None


GuardDecision = Union[Suspend, Render, Redirect]


class RouteGuard:
    def __init__(self, *, login_path: str = "/admin/login", home_path: str = "/") -> None:
        self._login_path = login_path
        self._home_path = home_path

    def evaluate(
        self, *, state: AuthState, capability: Capability, location: str
    ) -> GuardDecision:
        if isinstance(state, Resolving):
            return Suspend()
        if capability is Capability.public:
            return Render()
        if isinstance(state, Anonymous):
            return Redirect(to=self._login_path, replace=True, return_to=location)
        if capability is Capability.require_admin and isinstance(state, Authenticated):
            if not state.is_admin:
                # Valid identity, insufficient privilege: login would not help.
                return Redirect(to=self._home_path, replace=True)
        return Render()


def resolve_return_to(carried: str | None, *, default: str = "/admin") -> str:
    """
    Destination after sign-in: the carried location when it is a local path, else `default`.
    """

    if not carried or "\\" in carried:
        # Browsers read `/\host` as `//host`.
        return default
    parts = urlsplit(carried)
    if parts.scheme or parts.netloc or not carried.startswith("/") or carried.startswith("//"):
        return default
    return carried


# --- Module Notes -----------------------------------------------------------
# Public destinations render even while anonymous, but still suspend while the
# session is resolving so a page never flashes signed-out chrome.

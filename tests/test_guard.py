"""
tests.test_guard

RouteGuard decisions and the login return-to flow.
"""

from __future__ import annotations

import uuid

import pytest

from blog_cms.auth.guard import (
    Capability,
    Redirect,
    Render,
    RouteGuard,
    Suspend,
    resolve_return_to,
)
from blog_cms.auth.models import ANONYMOUS, RESOLVING, Authenticated, Identity
from blog_cms.core.result import Ok

guard = RouteGuard(login_path="/admin/login", home_path="/")


def _authenticated(is_admin: bool) -> Authenticated:
    return Authenticated(
        identity=Identity(user_id=uuid.uuid4(), email="someone@blog.test"), is_admin=is_admin
    )


@pytest.mark.parametrize("capability", list(Capability))
def test_resolving_session_suspends(capability: Capability) -> None:
    decision = guard.evaluate(state=RESOLVING, capability=capability, location="/admin")
    assert isinstance(decision, Suspend)
    assert decision.placeholder == "Loading..."


@pytest.mark.parametrize(
    "capability", [Capability.require_authenticated, Capability.require_admin]
)
def test_anonymous_is_sent_to_login_with_location(capability: Capability) -> None:
    decision = guard.evaluate(state=ANONYMOUS, capability=capability, location="/admin/posts/new")
    assert decision == Redirect(to="/admin/login", replace=True, return_to="/admin/posts/new")


def test_non_admin_is_sent_home_not_to_login() -> None:
    decision = guard.evaluate(
        state=_authenticated(is_admin=False),
        capability=Capability.require_admin,
        location="/admin/posts",
    )
    assert decision == Redirect(to="/", replace=True, return_to=None)


def test_non_admin_passes_authenticated_gate() -> None:
    decision = guard.evaluate(
        state=_authenticated(is_admin=False),
        capability=Capability.require_authenticated,
        location="/admin/me",
    )
    assert isinstance(decision, Render)


def test_admin_renders_admin_destination() -> None:
    decision = guard.evaluate(
        state=_authenticated(is_admin=True), capability=Capability.require_admin, location="/admin"
    )
    assert isinstance(decision, Render)


def test_public_renders_for_anonymous() -> None:
    assert isinstance(
        guard.evaluate(state=ANONYMOUS, capability=Capability.public, location="/"), Render
    )


@pytest.mark.parametrize(
    ("carried", "expected"),
    [
        (None, "/admin"),
        ("", "/admin"),
        ("/admin/posts", "/admin/posts"),
        ("/admin/posts?page=2", "/admin/posts?page=2"),
        ("https://evil.example/phish", "/admin"),
        ("//evil.example/phish", "/admin"),
        ("admin/posts", "/admin"),
        ("/\\evil.example", "/admin"),
        ("/\\/evil.example", "/admin"),
        ("\\\\evil.example", "/admin"),
    ],
)
def test_resolve_return_to(carried: str | None, expected: str) -> None:
    assert resolve_return_to(carried) == expected


@pytest.mark.asyncio
async def test_requested_path_is_recovered_after_sign_in(new_session) -> None:
    session = new_session()
    await session.resolve(None)

    decision = guard.evaluate(
        state=session.current(), capability=Capability.require_admin, location="/admin/posts/new"
    )
    assert isinstance(decision, Redirect)

    result = await session.sign_in("admin@blog.test", "s3cret")
    assert isinstance(result, Ok)
    assert resolve_return_to(decision.return_to) == "/admin/posts/new"
    assert isinstance(
        guard.evaluate(
            state=session.current(),
            capability=Capability.require_admin,
            location=resolve_return_to(decision.return_to),
        ),
        Render,
    )

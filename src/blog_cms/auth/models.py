"""
blog_cms.auth.models

Auth domain models.

Responsibilities:
- Define the acting identity and the profile it resolves to.
- Define the three `AuthSession` states.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Authenticated user, independent of any capability.
    """

    user_id: uuid.UUID
    email: str


@dataclass(frozen=True, slots=True)
class Profile:
    username: str
    is_admin: bool


@dataclass(frozen=True, slots=True)
class Resolving:
    pass


@dataclass(frozen=True, slots=True)
class Anonymous:
    pass


@dataclass(frozen=True, slots=True)
class Authenticated:
    identity: Identity
    is_admin: bool
    username: str | None = None


AuthState = Union[Resolving, Anonymous, Authenticated]

RESOLVING = Resolving()
ANONYMOUS = Anonymous()


# --- Module Notes -----------------------------------------------------------
# `is_admin` is always derived from a profile lookup on the server side, never read
# from a token claim or a client payload.

"""
blog_cms.core.result

Discriminated result type returned at every store/auth boundary.

Responsibilities:
- `Ok{value}` / `Err{kind, detail}` instead of value-or-error pairs.
- The error taxonomy (`ErrorKind`) shared by controllers and the API layer.

Store and auth adapters never raise for expected failures; callers branch on
`isinstance(result, Err)` and propagate the `Err` unchanged when they cannot handle it.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(enum.StrEnum):
    # Empty title/slug or missing identity, detected before any store call.
    validation = "VALIDATION"
    # Store-reported failure (constraint violation, transport failure).
    store = "STORE"
    # Invalid sign-in credentials.
    auth = "AUTH"
    # Requested post id/slug does not resolve (or is not visible to the caller).
    not_found = "NOT_FOUND"
    # Anything escaping a save path that was not reported by a collaborator.
    unexpected = "UNEXPECTED"
    # The same action is already in flight on this controller.
    busy = "BUSY"
    # The user declined a confirmation prompt.
    cancelled = "CANCELLED"


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err:
    kind: ErrorKind
    detail: str


Result = Union[Ok[T], Err]


# --- Module Notes -----------------------------------------------------------
# `Err` is not generic: it carries no value, so an `Err` produced by
# one boundary can be returned as-is from a caller with a different success type.

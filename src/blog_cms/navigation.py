"""
blog_cms.navigation

Host-side collaborators the controllers call into.

Responsibilities:
- `Navigator`: move the user to another location.
- `Confirmer`: ask a yes/no question before a destructive action.
- `Notifier`: surface a failure notice to the user.
- Recording implementations used by the HTTP layer (and tests) to turn those calls
  into response data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


class Navigator(Protocol):
    def go_to(
        self, path: str, *, replace: bool = False, carry_state: dict[str, Any] | None = None
    ) -> None: ...


class Confirmer(Protocol):
    async def confirm(self, message: str) -> bool: ...


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


@dataclass(frozen=True, slots=True)
class Destination:
    path: str
    replace: bool = False
    carry_state: dict[str, Any] | None = None


@dataclass(slots=True)
class RecordingNavigator:
    history: list[Destination] = field(default_factory=list)

    def go_to(
        self, path: str, *, replace: bool = False, carry_state: dict[str, Any] | None = None
    ) -> None:
        self.history.append(Destination(path=path, replace=replace, carry_state=carry_state))

    @property
    def last(self) -> Destination | None:
        return self.history[-1] if self.history else None


@dataclass(frozen=True, slots=True)
class FixedAnswer:
    """
    Confirmer whose answer was collected before the request reached the controller
    (e.g. a `confirm=true` query parameter).
    """

    answer: bool

    async def confirm(self, message: str) -> bool:
        return self.answer


@dataclass(slots=True)
class CollectingNotifier:
    notices: list[str] = field(default_factory=list)

    def notify(self, message: str) -> None:
        self.notices.append(message)

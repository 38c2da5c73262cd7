from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    # Persist naive UTC timestamps; SQLite drops tzinfo on round-trip anyway.
    return datetime.now(tz=UTC).replace(tzinfo=None)

"""
blog_cms.observability.logging

Structured logging configuration for the service.

Responsibilities:
- Configure `structlog` for JSON logs tagged with the service name.
- Keep credentials out of log lines.
- Bind the acting identity for the rest of a request.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

# Event keys that must never be written out, whatever logged them.
REDACTED_KEYS = frozenset({"password", "access_token", "token", "authorization", "jwt_secret"})


def configure_logging(*, service_name: str, level: str) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _tag_service(service_name),
            _redact_secrets,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _tag_service(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def _redact_secrets(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in REDACTED_KEYS.intersection(event_dict):
        event_dict[key] = "[redacted]"
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_identity(user_id: str | None, *, is_admin: bool) -> None:
    """
    Attach the acting identity to every subsequent log line of the current request.
    """

    if user_id is None:
        structlog.contextvars.unbind_contextvars("user_id", "is_admin")
        return
    structlog.contextvars.bind_contextvars(user_id=user_id, is_admin=is_admin)


# --- Module Notes -----------------------------------------------------------
# Request-scoped metadata is bound via contextvars in `observability.middleware`;
# identity is bound by the auth dependencies once the session is resolved.

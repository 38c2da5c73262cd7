"""
blog_cms.api.errors

Translate core `Err` values into HTTP errors.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import NoReturn

from fastapi import HTTPException

from blog_cms.core.result import Err, ErrorKind

_STATUS_BY_KIND: dict[ErrorKind, HTTPStatus] = {
    ErrorKind.validation: HTTPStatus.UNPROCESSABLE_ENTITY,
    ErrorKind.store: HTTPStatus.BAD_REQUEST,
    ErrorKind.auth: HTTPStatus.UNAUTHORIZED,
    ErrorKind.not_found: HTTPStatus.NOT_FOUND,
    ErrorKind.busy: HTTPStatus.CONFLICT,
    ErrorKind.cancelled: HTTPStatus.BAD_REQUEST,
    ErrorKind.unexpected: HTTPStatus.INTERNAL_SERVER_ERROR,
}


def status_for(err: Err) -> int:
    return int(_STATUS_BY_KIND.get(err.kind, HTTPStatus.INTERNAL_SERVER_ERROR))


def raise_for_err(err: Err, *, detail: str | None = None) -> NoReturn:
    raise HTTPException(status_code=status_for(err), detail=detail or err.detail)

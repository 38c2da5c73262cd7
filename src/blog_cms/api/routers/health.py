"""
blog_cms.api.routers.health

Liveness and readiness probes.

Responsibilities:
- `/healthz`: the process is up (no I/O).
- `/readyz`: the database answers and the posts table exists.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from blog_cms import __version__
from blog_cms.api.deps import db_session
from blog_cms.db.models import PostRow
from blog_cms.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str]:
    try:
        await session.execute(select(func.count()).select_from(PostRow))
    except SQLAlchemyError as e:
        # Usually a prod deploy where the schema has not been created yet.
        log.warning("readyz.failed", error=str(e))
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="Database not ready")
    return {"status": "ready"}

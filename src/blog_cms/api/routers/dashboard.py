"""
blog_cms.api.routers.dashboard

Admin landing page data: post counts and the signed-in author's name.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from blog_cms.api.deps import store_dep
from blog_cms.api.errors import raise_for_err
from blog_cms.auth.deps import require
from blog_cms.auth.guard import Capability
from blog_cms.auth.models import Authenticated
from blog_cms.auth.session import AuthSession
from blog_cms.core.result import Err
from blog_cms.posts.stats import compute_stats
from blog_cms.store.ports import RecordStore

router = APIRouter(prefix="/admin", tags=["admin"])


class DashboardResponse(BaseModel):
    username: str
    total_posts: int
    published_posts: int
    draft_posts: int


@router.get("", response_model=DashboardResponse)
async def dashboard(
    session: AuthSession = Depends(require(Capability.require_admin)),
    store: RecordStore = Depends(store_dep),
) -> DashboardResponse:
    result = await store.select()
    if isinstance(result, Err):
        raise_for_err(result)
    stats = compute_stats(result.value)
    state = session.current()
    username = state.username if isinstance(state, Authenticated) and state.username else "Admin"
    return DashboardResponse(
        username=username,
        total_posts=stats.total_posts,
        published_posts=stats.published_posts,
        draft_posts=stats.draft_posts,
    )

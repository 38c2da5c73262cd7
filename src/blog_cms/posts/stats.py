from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from blog_cms.store.ports import Post


@dataclass(frozen=True, slots=True)
class DashboardStats:
    total_posts: int
    published_posts: int
    draft_posts: int


def compute_stats(posts: Iterable[Post]) -> DashboardStats:
    total = published = 0
    for post in posts:
        total += 1
        if post.published:
            published += 1
    return DashboardStats(total_posts=total, published_posts=published, draft_posts=total - published)

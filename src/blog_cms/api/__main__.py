"""
blog_cms.api.__main__

Entrypoint for `python -m blog_cms.api` and the `blog-cms` console script.
"""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI

from blog_cms.api.app import create_app
from blog_cms.settings import get_settings


def app_factory() -> FastAPI:
    return create_app(settings=get_settings())


def main() -> None:
    settings = get_settings()
    # Factory form so `--reload` style restarts rebuild the app from fresh settings.
    uvicorn.run(
        "blog_cms.api.__main__:app_factory",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.env == "dev",
        log_config=None,
    )


if __name__ == "__main__":
    main()

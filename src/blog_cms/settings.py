"""
blog_cms.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (JWT secret, bootstrap password).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BLOG_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables and admin seeding.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "blog-cms"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Session tokens
    jwt_alg: str = "HS256"
    jwt_issuer: str = "blog-cms"
    jwt_audience: str = "blog-cms-admin"
    jwt_secret: str = Field(default="dev-secret-change-me-before-deploying", repr=False)
    session_ttl_minutes: int = Field(default=12 * 60, ge=1)
    session_cookie_name: str = "blog_session"

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./blog.db"

    # Navigation destinations
    home_path: str = "/"
    login_path: str = "/admin/login"
    admin_home_path: str = "/admin"
    post_list_path: str = "/admin/posts"

    # Dev/test seeding of the single author account.
    bootstrap_admin_email: str | None = None
    bootstrap_admin_password: str | None = Field(default=None, repr=False)
    bootstrap_admin_username: str = "admin"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()

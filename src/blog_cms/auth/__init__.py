"""
blog_cms.auth

Authentication/authorization package.

Responsibilities:
- Session tokens (JWT) and the credential backend.
- The per-request `AuthSession` state machine.
- The `RouteGuard` and its FastAPI dependencies.
"""

# Package marker.

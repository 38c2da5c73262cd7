"""
blog_cms.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Only `blog_cms.store.sql` and `blog_cms.auth.backend` import from here; controllers
# see persistence exclusively through the RecordStore / AuthBackend ports.

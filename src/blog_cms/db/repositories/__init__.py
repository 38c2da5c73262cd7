"""
blog_cms.db.repositories

Repository package.

Responsibilities:
- Group data-access repositories for the persistence layer.
"""

# Package marker; repositories are imported directly from submodules.


# --- Module Notes -----------------------------------------------------------
# Repositories never commit; transactions and error translation belong to
# the adapters in `blog_cms.store.sql` and `blog_cms.auth.backend`.

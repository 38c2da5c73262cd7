"""
blog_cms.store

Post persistence boundary.

Responsibilities:
- The `RecordStore` port used by controllers.
- The SQLAlchemy-backed adapter used by the service.
"""

# Package marker; import from submodules directly.

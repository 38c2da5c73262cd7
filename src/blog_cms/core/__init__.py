"""
blog_cms.core

Shared primitives used by every layer.

Responsibilities:
- Explicit success/error result type and the error taxonomy.
- Clock helper for persisted timestamps.
"""

# Package marker.

"""
blog_cms.posts

Post-facing behavior outside the editor.

Responsibilities:
- Slug derivation.
- The admin post list controller and dashboard statistics.
- Public (reader) access to published posts.
"""

# Package marker.

"""
blog_cms.rendering

Read-only rendering of post bodies.
"""

# Package marker.

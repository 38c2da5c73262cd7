"""
blog_cms.api

HTTP surface over the authoring core.

Responsibilities:
- App factory, dependency wiring, error mapping and routers.
"""

# Package marker.

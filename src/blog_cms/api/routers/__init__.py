"""
blog_cms.api.routers

HTTP routers grouped by audience (public, auth, admin).
"""

# Package marker.

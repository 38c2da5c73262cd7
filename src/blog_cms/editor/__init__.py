"""
blog_cms.editor

Post authoring: typed draft, validation, and the editor state machine.
"""

# Package marker.

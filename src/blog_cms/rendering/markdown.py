"""
blog_cms.rendering.markdown

Read-only side of the document widget.

Responsibilities:
- Render stored markdown to HTML for the public detail page and the editor preview.
- Assemble the "as published" view of a post from plain field values.
"""

from __future__ import annotations

from dataclasses import dataclass

from markdown_it import MarkdownIt

UNTITLED = "Untitled Post"

# CommonMark plus tables; fenced code keeps its info string as `class="language-xxx"`.
_md = MarkdownIt("commonmark", {"html": True}).enable("table")


def render_markdown(content: str | None) -> str:
    if not content:
        return ""
    return _md.render(content).strip()


@dataclass(frozen=True, slots=True)
class RenderedPost:
    title: str
    excerpt: str | None
    cover_image: str | None
    content_html: str


def render_post(
    *, title: str, excerpt: str | None, cover_image: str | None, content: str
) -> RenderedPost:
    # Blank optional fields are simply not shown.
    return RenderedPost(
        title=title or UNTITLED,
        excerpt=excerpt or None,
        cover_image=cover_image or None,
        content_html=render_markdown(content),
    )

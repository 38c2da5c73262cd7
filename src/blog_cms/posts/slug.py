from __future__ import annotations

import re

_NOT_SLUG_CHAR = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Derive a URL-safe identifier from a post title.

    Lower-cases the title, collapses every run of characters outside ``[a-z0-9]``
    into a single hyphen and strips hyphens from both ends. Total and idempotent;
    returns ``""`` when the title has no ASCII letters or digits.

    Examples:
        >>> slugify("My Awesome Blog Post! #1")
        'my-awesome-blog-post-1'
        >>> slugify("  --Hello,   World--  ")
        'hello-world'
        >>> slugify("Café")
        'caf'
        >>> slugify("!!!")
        ''

    """
    return _NOT_SLUG_CHAR.sub("-", title.lower()).strip("-")

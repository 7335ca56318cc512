"""Markdown rendering for project and task descriptions."""
from __future__ import annotations

from typing import Optional

import bleach
from markdown import markdown as render_markdown
from markupsafe import Markup

# Markdown "extra" output a description may keep.
ALLOWED_TAGS = sorted(
    set(bleach.sanitizer.ALLOWED_TAGS)
    | {"p", "pre", "br", "hr", "h1", "h2", "h3", "table", "thead", "tbody", "tr", "th", "td"}
)
ALLOWED_ATTRIBUTES = {**bleach.sanitizer.ALLOWED_ATTRIBUTES, "a": ["href", "title", "rel"]}


def render_description_html(description: Optional[str]) -> Markup:
    if not description:
        return Markup("")
    html = render_markdown(description, extensions=["extra", "sane_lists"], tab_length=2)
    return Markup(bleach.clean(html, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES))

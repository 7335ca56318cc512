"""Documents handed to the external free-text search index."""
from __future__ import annotations

from typing import Iterator

from database import db
from models.project import Project


def iter_project_search_documents(include_inactive: bool = False) -> Iterator[dict[str, object]]:
    """Yield one index document per project, in id order."""

    query = db.select(Project).order_by(Project.id)
    if not include_inactive:
        query = query.where(Project.is_active == True)  # noqa: E712
    for project in db.session.execute(query).scalars():
        yield {"id": project.id, "type": "project", "text": project.search_text}

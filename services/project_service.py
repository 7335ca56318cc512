"""Persistence and presentation helpers for the project resource."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from sqlalchemy import or_

from database import db
from forms import ProjectForm
from models.client import Client
from models.project import Project
from models.project_status import ProjectStatus
from models.project_type import ProjectType
from models.task import Task
from models.user import User

logger = logging.getLogger(__name__)

DATE_FILTER_FIELDS = ("created_at", "updated_at")
DATE_FILTER_OPERATORS = ("before", "strictly_before", "after", "strictly_after")
ORDER_DIRECTIONS = ("asc", "desc")


class ReferenceNotFound(LookupError):
    """Raised when a payload points to a related row that does not exist."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


def is_truthy(value: Any) -> bool:
    """Return True when the provided value represents an enabled boolean."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
    return False


# Serialization
# ------------------------------


def _audit_payload(project: Project) -> dict[str, Any]:
    audit = project.audit
    return {
        "created_at": audit.created_at.isoformat() if audit.created_at else None,
        "updated_at": audit.updated_at.isoformat() if audit.updated_at else None,
        "created_by": audit.created_by,
        "updated_by": audit.updated_by,
    }


def serialize_project(project: Project) -> dict[str, Any]:
    """Return the ``project_read`` field group for ``project``."""

    payload = {
        "id": project.id,
        "name": project.name,
        "description": project.description,
        "description_html": str(project.description_html),
        "client": project.client.to_dict() if project.client else None,
        "status": project.status.to_dict() if project.status else None,
        "type": project.type.to_dict() if project.type else None,
        "tasks": [task.to_dict() for task in project.tasks],
        "documents": [{"id": document.id, "name": document.name} for document in project.documents],
        "search_text": project.search_text,
        "is_active": bool(project.is_active),
    }
    payload.update(_audit_payload(project))
    return payload


def serialize_pagination(pagination) -> dict[str, Any]:
    return {
        "items": [serialize_project(project) for project in pagination.items],
        "page": pagination.page,
        "per_page": pagination.per_page,
        "total": pagination.total,
        "pages": pagination.pages,
    }


# Writes
# ------------------------------

# Fields a PUT may leave out; the stored value is kept when they are absent.
PRESERVED_WHEN_OMITTED = ("description", "is_active", "tasks")


def _text(value: Any) -> Any:
    """Strip strings; anything else is left for the form to reject."""
    return value.strip() if isinstance(value, str) else value


def _normalize_task_entry(entry: Any) -> dict[str, Any]:
    if not isinstance(entry, Mapping):
        return {"name": ""}
    return {
        "id": entry.get("id"),
        "name": _text(entry.get("name")) or "",
        "description": entry.get("description") or None,
        "completed": is_truthy(entry.get("completed")),
    }


def populate_form_from_payload(form: ProjectForm, payload: Mapping[str, Any]) -> frozenset[str]:
    """Populate the form with the ``project_write`` fields of a JSON payload.

    Returns the omittable fields the payload actually supplied.
    """
    raw_tasks = payload.get("tasks")
    normalized = {
        "name": _text(payload.get("name")) or "",
        "description": payload.get("description") or None,
        "client_id": payload.get("client_id"),
        "status_id": payload.get("status_id"),
        "type_id": payload.get("type_id"),
        "is_active": is_truthy(payload.get("is_active", True)),
        "tasks": [_normalize_task_entry(entry) for entry in raw_tasks] if isinstance(raw_tasks, list) else [],
    }
    form.process(data=normalized)
    return frozenset(field for field in PRESERVED_WHEN_OMITTED if field in payload)


def _resolve_reference(model, field: str, identifier: Optional[int], label: str):
    instance = db.session.get(model, identifier) if identifier is not None else None
    if instance is None:
        raise ReferenceNotFound(field, f"{label} {identifier} does not exist.")
    return instance


def _sync_tasks(project: Project, entries: Iterable[Mapping[str, Any]], user: User | None) -> None:
    """Make ``project.tasks`` match the submitted entries.

    Entries with an id update the matching task, entries without one create a
    task, and tasks missing from the payload are removed (and deleted as
    orphans on flush).
    """
    existing = {task.id: task for task in project.tasks if task.id is not None}
    kept: set[int] = set()

    for entry in entries:
        task_id = entry.get("id")
        task = existing.get(task_id) if task_id is not None else None
        if task_id is not None and task is None:
            raise ReferenceNotFound("tasks", f"Task {task_id} does not belong to this project.")
        if task is None:
            task = Task()
            project.add_task(task)
        else:
            kept.add(task.id)
        task.name = entry.get("name")
        task.description = entry.get("description") or None
        if entry.get("completed"):
            task.complete_task()
        else:
            task.uncomplete_task()
        task.stamp_blame(user)

    for task_id, task in existing.items():
        if task_id not in kept:
            project.remove_task(task)


def apply_project_form(
    project: Project,
    form: ProjectForm,
    user: User | None,
    provided: Optional[Iterable[str]] = None,
) -> Project:
    """Copy validated ``project_write`` fields onto ``project``.

    ``provided`` limits the omittable fields that are written; ``None`` writes
    all of them.
    """
    provided = set(PRESERVED_WHEN_OMITTED if provided is None else provided)

    # Lookups must not flush a half-built project.
    with db.session.no_autoflush:
        project.client = _resolve_reference(Client, "client_id", form.client_id.data, "Client")
        project.status = _resolve_reference(ProjectStatus, "status_id", form.status_id.data, "Status")
        project.type = _resolve_reference(ProjectType, "type_id", form.type_id.data, "Type")
        project.name = form.name.data.strip()
        if "description" in provided:
            project.description = form.description.data or None
        if "is_active" in provided:
            if form.is_active.data:
                project.activate()
            else:
                project.deactivate()
        if "tasks" in provided:
            _sync_tasks(project, [entry.data for entry in form.tasks.entries], user)
        project.stamp_blame(user)
    return project


def create_project(form: ProjectForm, user: User | None) -> Project:
    project = Project()
    apply_project_form(project, form, user)
    db.session.add(project)
    return project


def update_project(
    project: Project,
    form: ProjectForm,
    user: User | None,
    provided: Optional[Iterable[str]] = None,
) -> Project:
    return apply_project_form(project, form, user, provided)


def deactivate_project(project: Project, user: User | None) -> Project:
    project.deactivate()
    project.stamp_blame(user)
    return project


# Reads
# ------------------------------


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Ignoring unparseable date filter value: %s", value)
        return None
    # Timestamps are stored as naive UTC.
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _parse_int(value: Optional[str], name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer %s filter value: %s", name, value)
        return None


def _orderable_columns():
    return {
        "id": Project.id,
        "name": Project.name,
        "status_id": Project.status_id,
        "type_id": Project.type_id,
        "client_name": Client.name,
        "created_at": Project.created_at,
        "updated_at": Project.updated_at,
    }


def build_project_query(args: Mapping[str, str]):
    """Return a SELECT for projects filtered and ordered by request ``args``."""

    query = db.select(Project).join(Client, Project.client_id == Client.id)

    project_id = _parse_int(args.get("id"), "id")
    if project_id is not None:
        query = query.where(Project.id == project_id)
    status_id = _parse_int(args.get("status_id"), "status_id")
    if status_id is not None:
        query = query.where(Project.status_id == status_id)
    type_id = _parse_int(args.get("type_id"), "type_id")
    if type_id is not None:
        query = query.where(Project.type_id == type_id)

    name = (args.get("name") or "").strip()
    if name:
        query = query.where(Project.name.ilike(f"%{name}%"))
    client_name = (args.get("client_name") or "").strip()
    if client_name:
        query = query.where(Client.name.ilike(f"%{client_name}%"))
    search = (args.get("search") or "").strip()
    if search:
        query = query.where(
            or_(Project.name.ilike(f"%{search}%"), Project.description.ilike(f"%{search}%"))
        )

    active_raw = (args.get("is_active") or "true").strip().lower()
    if active_raw != "all":
        query = query.where(Project.is_active == is_truthy(active_raw))

    for field in DATE_FILTER_FIELDS:
        column = getattr(Project, field)
        for operator in DATE_FILTER_OPERATORS:
            value = _parse_datetime(args.get(f"{field}[{operator}]"))
            if value is None:
                continue
            if operator == "before":
                query = query.where(column <= value)
            elif operator == "strictly_before":
                query = query.where(column < value)
            elif operator == "after":
                query = query.where(column >= value)
            else:
                query = query.where(column > value)

    columns = _orderable_columns()
    ordering = []
    ordered_by_id = False
    for key in args.keys():
        if not (key.startswith("order[") and key.endswith("]")):
            continue
        field = key[len("order["):-1]
        direction = (args.get(key) or "").strip().lower()
        column = columns.get(field)
        if column is None or direction not in ORDER_DIRECTIONS:
            logger.warning("Ignoring unsupported ordering %s=%s", key, direction)
            continue
        ordering.append(column.asc() if direction == "asc" else column.desc())
        ordered_by_id = ordered_by_id or field == "id"
    if not ordered_by_id:
        ordering.append(Project.id.desc())
    return query.order_by(*ordering)


def list_projects(args: Mapping[str, str], *, page: int, per_page: int, max_per_page: int):
    return db.paginate(
        build_project_query(args),
        page=page,
        per_page=per_page,
        max_per_page=max_per_page,
        error_out=False,
    )

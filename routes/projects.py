"""Project resource blueprint."""
from __future__ import annotations

import logging

from flask import Blueprint, current_app, g, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from database import db
from forms import ProjectForm
from models.project import Project
from routes import json_error, requires_permission, validate_request_csrf
from services.project_service import (
    ReferenceNotFound,
    create_project,
    deactivate_project,
    list_projects as query_projects,
    populate_form_from_payload,
    serialize_pagination,
    serialize_project,
    update_project,
)

logger = logging.getLogger(__name__)

PROJECT_LIST = "ROLE_PROJECT_LIST"
PROJECT_CREATE = "ROLE_PROJECT_CREATE"
PROJECT_SHOW = "ROLE_PROJECT_SHOW"
PROJECT_UPDATE = "ROLE_PROJECT_UPDATE"
PROJECT_DELETE = "ROLE_PROJECT_DELETE"

projects_bp = Blueprint("projects", __name__, url_prefix="/api/projects")


def _positive_int_arg(name: str, default: int) -> int:
    value = request.args.get(name, type=int)
    if value is None or value < 1:
        return default
    return value


def _bind_form() -> tuple[ProjectForm | None, frozenset[str], object]:
    """Build a ProjectForm from the JSON body, or return an error response."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return None, frozenset(), json_error("A JSON object body is required.")
    csrf_valid, csrf_message = validate_request_csrf(payload.get("csrf_token"))
    if not csrf_valid:
        return None, frozenset(), json_error(csrf_message or "Invalid CSRF token.")

    form = ProjectForm(formdata=None, meta={"csrf": False})
    provided = populate_form_from_payload(form, payload)
    if not form.validate():
        return None, provided, json_error("The project could not be saved.", errors=form.errors)
    return form, provided, None


def _commit(message: str):
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("%s: %s", message, exc, exc_info=True)
        return json_error(f"{message}. Please try again.", status=500)
    return None


@projects_bp.route("/", methods=["GET"], strict_slashes=False)
@requires_permission(PROJECT_LIST)
def list_projects():
    """Return a page of projects matching the query string filters."""

    config = current_app.config
    pagination = query_projects(
        request.args,
        page=_positive_int_arg("page", 1),
        per_page=_positive_int_arg("per_page", config["PROJECTS_PER_PAGE"]),
        max_per_page=config["PROJECTS_MAX_PER_PAGE"],
    )
    return jsonify({"success": True, **serialize_pagination(pagination)})


@projects_bp.route("/", methods=["POST"], strict_slashes=False)
@requires_permission(PROJECT_CREATE)
def create():
    form, _provided, error = _bind_form()
    if error is not None:
        return error

    try:
        project = create_project(form, g.user)
    except ReferenceNotFound as exc:
        db.session.rollback()
        return json_error("The project could not be saved.", errors={exc.field: [exc.message]})

    error = _commit("Unable to create the project")
    if error is not None:
        return error
    logger.info("Project %s created by %s", project.id, g.user.username)
    return jsonify({"success": True, "project": serialize_project(project)}), 201


@projects_bp.route("/<int:project_id>", methods=["GET"])
@requires_permission(PROJECT_SHOW)
def show(project_id: int):
    project = db.get_or_404(Project, project_id)
    return jsonify({"success": True, "project": serialize_project(project)})


@projects_bp.route("/<int:project_id>", methods=["PUT"])
@requires_permission(PROJECT_UPDATE)
def update(project_id: int):
    """Write the submitted fields onto a project. Omitted description, is_active and tasks are kept."""

    project = db.get_or_404(Project, project_id)
    form, provided, error = _bind_form()
    if error is not None:
        return error

    try:
        update_project(project, form, g.user, provided)
    except ReferenceNotFound as exc:
        db.session.rollback()
        return json_error("The project could not be saved.", errors={exc.field: [exc.message]})

    error = _commit("Unable to update the project")
    if error is not None:
        return error
    return jsonify({"success": True, "project": serialize_project(project)})


@projects_bp.route("/<int:project_id>", methods=["DELETE"])
@requires_permission(PROJECT_DELETE)
def delete(project_id: int):
    """Deactivate a project. Rows are never removed."""

    project = db.get_or_404(Project, project_id)
    deactivate_project(project, g.user)
    error = _commit("Unable to delete the project")
    if error is not None:
        return error
    logger.info("Project %s deactivated by %s", project.id, g.user.username)
    return "", 204

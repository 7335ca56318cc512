import json
import logging

import click
from flask import Flask, g, jsonify, request, session
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import Config
from database import db

# Initialize Flask app
app = Flask(__name__)
app.config.from_object(Config)

logging.basicConfig(
    level=getattr(logging, app.config["LOG_LEVEL"], logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

db.init_app(app)

# Models import should be after initializing db
from models.client import Client
from models.document import Document
from models.project import Project
from models.project_status import ProjectStatus
from models.project_type import ProjectType
from models.reference import PaymentType, ShipmentMethod
from models.task import Task
from models.user import User

from routes.auth import auth_bp
from routes.projects import projects_bp
from services.search_service import iter_project_search_documents

# Create flask command lines to update the db based on the model
# Usage:
# Create a migration script in ./migrations/versions
# > flask db migrate -m "Update comments"
# Run the update
# > flask db upgrade
migrate = Migrate(app, db)
app.register_blueprint(auth_bp)
app.register_blueprint(projects_bp)


# User Authentication
# ------------------------------
@app.before_request
def load_user():
    """Expose the logged-in User (or None) as g.user for every request."""
    user_id = session.get("user_id")
    user = db.session.get(User, user_id) if user_id else None
    if user is not None and not user.is_active:
        user = None
    g.user = user


# Errors
# ------------------------------
@app.errorhandler(HTTPException)
def handle_http_error(error: HTTPException):
    """Answer API requests with the JSON error shape used by the blueprints."""
    if not request.path.startswith("/api/"):
        return error
    return (
        jsonify({"success": False, "message": error.description or error.name}),
        error.code or 500,
    )


# Commands
# ------------------------------
@app.cli.command("search-export")
@click.option("--include-inactive", is_flag=True, help="Also export deactivated projects.")
def search_export(include_inactive):
    """Print one JSON line per project for the search indexer."""
    for document in iter_project_search_documents(include_inactive=include_inactive):
        click.echo(json.dumps(document))


@app.cli.command("create-user")
@click.argument("username")
@click.argument("password")
@click.option("--name", default=None, help="Display name, defaults to the username.")
@click.option("--admin", is_flag=True, help="Grant every permission.")
@click.option("--permission", "permissions", multiple=True, help="Permission to grant (repeatable).")
def create_user(username, password, name, admin, permissions):
    """Create an API user."""
    user = User(username=username, name=name or username, role=User.ADMIN if admin else User.USER)
    user.set_password(password)
    user.grant(*permissions)
    db.session.add(user)
    db.session.commit()
    click.echo(f"Created user {user.username} ({user.id})")


if __name__ == "__main__":
    app.run(debug=True)

import json
import unittest

from app import app, db
from models.client import Client
from models.project import Project
from models.project_status import ProjectStatus
from models.project_type import ProjectType
from models.user import User
from tests.utils.db import reset_database


class CliTestCase(unittest.TestCase):
    def setUp(self):
        with app.app_context():
            reset_database(db)
            client = Client(name="Acme")
            status = ProjectStatus(name="Open")
            project_type = ProjectType(name="Retainer")
            active = Project(name="Alpha", description="Intranet", client=client, status=status, type=project_type)
            bare = Project(name="Beta", client=client, status=status, type=project_type)
            retired = Project(name="Gamma", client=client, status=status, type=project_type)
            retired.deactivate()
            db.session.add_all([active, bare, retired])
            db.session.commit()
        self.runner = app.test_cli_runner()

    def tearDown(self):
        with app.app_context():
            db.session.remove()
            db.drop_all()

    def test_search_export_emits_active_projects(self):
        result = self.runner.invoke(args=["search-export"])

        self.assertEqual(result.exit_code, 0, result.output)
        documents = [json.loads(line) for line in result.output.splitlines()]
        self.assertEqual(
            documents,
            [
                {"id": 1, "type": "project", "text": "Alpha Intranet"},
                {"id": 2, "type": "project", "text": "Beta "},
            ],
        )

    def test_search_export_can_include_inactive(self):
        result = self.runner.invoke(args=["search-export", "--include-inactive"])

        self.assertEqual(len(result.output.splitlines()), 3)

    def test_create_user(self):
        result = self.runner.invoke(
            args=["create-user", "dana", "secret", "--permission", "ROLE_PROJECT_LIST", "--permission", "ROLE_PROJECT_SHOW"]
        )

        self.assertEqual(result.exit_code, 0, result.output)
        with app.app_context():
            user = User.query.filter_by(username="dana").one()
            self.assertTrue(user.check_password("secret"))
            self.assertTrue(user.has_permission("ROLE_PROJECT_SHOW"))
            self.assertFalse(user.has_permission("ROLE_PROJECT_DELETE"))

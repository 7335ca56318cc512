import os

import pytest

from tests.utils.db import cleanup_test_database, provision_test_database

# The app reads DATABASE_URL at import time, so this must run before any test
# module imports it.
_test_db_path, _test_db_uri = provision_test_database()
os.environ["DATABASE_URL"] = _test_db_uri


@pytest.fixture(scope="session", autouse=True)
def _remove_test_database():
    yield
    from app import db, app

    with app.app_context():
        db.session.remove()
        db.engine.dispose()
    cleanup_test_database(_test_db_path)

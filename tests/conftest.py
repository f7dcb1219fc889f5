"""
Shared fixtures.

Every test gets its own SQLite file under ``tmp_path`` so stores never
leak state between tests.
"""

import pytest
from fastapi.testclient import TestClient

from course_registry_api.app.core.db import Store, init_db
from course_registry_api.app.main import create_app
from course_registry_api.app.services import CourseService, PersonService


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def store(tmp_path):
    """An initialised store on an empty database file."""
    db = Store(str(tmp_path / "registry.db"))
    init_db(db)
    return db


@pytest.fixture
def person_service(store):
    return PersonService(store)


@pytest.fixture
def course_service(store):
    return CourseService(store)


@pytest.fixture
def client(store):
    """A test client whose app runs its startup against ``store``."""
    with TestClient(create_app(store=store)) as test_client:
        yield test_client


@pytest.fixture
def enrollment_rows(store):
    """Return a callable listing ``(person_id, course_id)`` join rows."""

    def _rows(person_id=None):
        with store.connection() as conn:
            if person_id is None:
                rows = conn.execute("SELECT person_id, course_id FROM person_course").fetchall()
            else:
                rows = conn.execute(
                    "SELECT person_id, course_id FROM person_course WHERE person_id = ?",
                    (person_id,),
                ).fetchall()
        return sorted((row["person_id"], row["course_id"]) for row in rows)

    return _rows

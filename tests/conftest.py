"""
Shared pytest fixtures for the Task Service test suite.

Provides the Flask application, test client, a clean database per test,
direct access to the injected ``TaskStore``, and a data factory that
inserts task rows.

Key Concepts Demonstrated:
- Session-scoped vs function-scoped fixtures
- Database setup/teardown for test isolation
- Factory pattern (task_factory) for flexible test-data creation
"""

from __future__ import annotations

import os
from typing import Any

import pytest
from faker import Faker

# Set testing environment before importing the application
os.environ["FLASK_ENV"] = "testing"

from task_service import create_app, db
from task_service.models import Task
from task_service.store import TaskStore

fake = Faker()


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="session")
def app():
    """
    Provide the Flask application instance for the entire test session.

    Creates the app once using the 'testing' configuration so the factory
    (and its database connectivity probe) runs a single time.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """Provide a Flask test client scoped to a single test function."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Provide a clean database for each test function.

    Creates all tables before the test and drops them afterwards, so
    every test starts with an empty ``tasks`` table whose ids begin at 1.
    """
    with app.app_context():
        db.drop_all()
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


@pytest.fixture
def store(app, db_session) -> TaskStore:
    """Return the ``TaskStore`` the application's handlers are bound to."""
    return app.extensions["task_store"]


# -----------------------------------------------------------------------------
# Data Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def task_factory(db_session):
    """
    Factory fixture that inserts Task rows in the test database.

    Returns a callable ``_create_task(**kwargs)`` that inserts a task with
    a Faker-generated name unless one is given, commits it and returns the
    persisted ``Task``.
    """

    def _create_task(*, name: str | None = None, priority: int | None = None) -> Task:
        task = Task(name=name if name is not None else fake.sentence(nb_words=3), priority=priority)
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task


@pytest.fixture
def sample_task(task_factory) -> Task:
    """Create a single task with known values."""
    return task_factory(name="Sample Task", priority=3)


@pytest.fixture
def multiple_tasks(task_factory) -> list[Task]:
    """Create four tasks, two of them without a priority."""
    return [
        task_factory(name="First", priority=1),
        task_factory(name="Second"),
        task_factory(name="Third", priority=10),
        task_factory(name="Fourth"),
    ]


@pytest.fixture
def valid_task_data() -> dict[str, Any]:
    """Provide a complete, valid creation payload."""
    return {"name": fake.sentence(nb_words=4), "priority": fake.random_int(min=1, max=5)}

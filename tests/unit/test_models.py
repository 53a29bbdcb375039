"""
Unit tests for the Task model's table definition.

Key SDET Concepts Demonstrated:
- Model-level unit testing independent of HTTP layer
- Verifying column constraints (NOT NULL, nullable, generated key)
"""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from task_service.models import Task

pytestmark = pytest.mark.unit


def test_task_gets_generated_id_and_null_priority(db_session):
    """Test that the database assigns task_id and leaves priority NULL."""
    # Arrange
    task = Task(name="Generated")

    # Act
    db_session.session.add(task)
    db_session.session.commit()

    # Assert
    assert task.task_id == 1
    assert task.priority is None


def test_task_ids_increase(db_session):
    """Test that successive inserts receive increasing ids."""
    # Arrange
    first, second = Task(name="one"), Task(name="two")

    # Act
    db_session.session.add_all([first, second])
    db_session.session.commit()

    # Assert
    assert first.task_id < second.task_id


def test_task_name_is_required(db_session):
    """Test that the name column rejects NULL."""
    # Arrange
    db_session.session.add(Task(name=None, priority=1))

    # Act / Assert
    with pytest.raises(IntegrityError):
        db_session.session.commit()
    db_session.session.rollback()


def test_task_repr(db_session):
    """Test the debugging representation."""
    # Arrange
    task = Task(name="Repr")
    db_session.session.add(task)
    db_session.session.commit()

    # Act / Assert
    assert repr(task) == f"<Task {task.task_id}: Repr>"

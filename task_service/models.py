"""
Database Models for the Task Service.

Defines the SQLAlchemy model describing the ``tasks`` table.  Handlers do
not load ORM instances; ``TaskStore`` builds Core statements against this
table and returns plain row dictionaries.
"""

from __future__ import annotations

from . import db


class Task(db.Model):
    """
    A single task.

    Attributes:
        task_id: Auto-incrementing primary key assigned by the database.
        name: Task name.  Required, but may be an empty string.
        priority: Optional integer priority.  ``NULL`` when unset.
    """

    __tablename__ = "tasks"

    task_id: int = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name: str = db.Column(db.Text, nullable=False)
    priority: int | None = db.Column(db.Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<Task {self.task_id}: {self.name}>"

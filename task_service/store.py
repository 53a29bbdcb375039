"""
Data access for the ``tasks`` table.

``TaskStore`` wraps a SQLAlchemy ``Engine`` (and therefore its connection
pool).  Each public method checks out exactly one connection inside a
``with`` block, so the connection returns to the pool on every exit path,
including not-found and error returns.  Database exceptions never escape:
they are converted to ``StoreError`` carrying the driver's message.  The
DBAPI raises ``OverflowError`` (not wrapped by SQLAlchemy) when a bound
integer does not fit the driver's integer type.

Concurrent ``update_task`` calls on the same row are last-write-wins; the
lookup and the write are not protected against other writers.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Engine, delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from .models import Task
from .results import NotFound, Ok, StoreError, StoreResult

logger = logging.getLogger(__name__)

tasks = Task.__table__


def _task_columns() -> select:
    return select(tasks.c.task_id, tasks.c.name, tasks.c.priority)


class TaskStore:
    """
    Task CRUD operations over a pooled SQLAlchemy engine.

    Args:
        engine: The engine whose pool bounds concurrent database access.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def list_tasks(self) -> StoreResult:
        """Return ``Ok`` with every task, ordered by ascending ``task_id``."""
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(_task_columns().order_by(tasks.c.task_id.asc())).all()
        except (SQLAlchemyError, OverflowError) as exc:
            return StoreError(str(exc))
        return Ok([row._asdict() for row in rows])

    def get_task(self, task_id: int) -> StoreResult:
        """Return ``Ok`` with the task dictionary, or ``NotFound``."""
        try:
            with self.engine.connect() as conn:
                row = conn.execute(_task_columns().where(tasks.c.task_id == task_id)).first()
        except (SQLAlchemyError, OverflowError) as exc:
            return StoreError(str(exc))
        if row is None:
            return NotFound(task_id)
        return Ok(row._asdict())

    def create_task(self, name: str, priority: int | None = None) -> StoreResult:
        """
        Insert a task and return ``Ok({"task_id": <new id>})``.

        A missing ``priority`` is stored as ``NULL``.
        """
        try:
            with self.engine.begin() as conn:
                result = conn.execute(insert(tasks).values(name=name, priority=priority))
                task_id = result.inserted_primary_key[0]
        except (SQLAlchemyError, OverflowError) as exc:
            return StoreError(str(exc))
        logger.info("Created task with ID: %s", task_id)
        return Ok({"task_id": task_id})

    def update_task(
        self,
        task_id: int,
        name: str | None = None,
        priority: int | None = None,
    ) -> StoreResult:
        """
        Merge the supplied fields into an existing task.

        ``None`` means "keep the stored value" for both fields, so
        ``priority`` cannot be cleared here.  The merged pair is always
        written back, even when nothing changed.

        Returns:
            ``Ok()`` on success, ``NotFound`` if the task does not exist.
        """
        try:
            with self.engine.begin() as conn:
                existing = conn.execute(
                    _task_columns().where(tasks.c.task_id == task_id)
                ).first()
                if existing is None:
                    return NotFound(task_id)

                merged: dict[str, Any] = {
                    "name": name if name is not None else existing.name,
                    "priority": priority if priority is not None else existing.priority,
                }
                conn.execute(update(tasks).where(tasks.c.task_id == task_id).values(**merged))
        except (SQLAlchemyError, OverflowError) as exc:
            return StoreError(str(exc))
        logger.info("Updated task %s", task_id)
        return Ok()

    def delete_task(self, task_id: int) -> StoreResult:
        """Delete a task.  Succeeds whether or not the task existed."""
        try:
            with self.engine.begin() as conn:
                conn.execute(delete(tasks).where(tasks.c.task_id == task_id))
        except (SQLAlchemyError, OverflowError) as exc:
            return StoreError(str(exc))
        logger.info("Deleted task %s", task_id)
        return Ok()

"""
Operation outcomes for the task store.

Every ``TaskStore`` operation returns exactly one of three variants:

  * ``Ok`` -- the operation succeeded, optionally carrying a payload.
  * ``NotFound`` -- the addressed task does not exist.
  * ``StoreError`` -- the database failed; ``message`` is the driver text.

``to_response`` is the single place where an outcome becomes an HTTP
status code and JSON envelope.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from flask import Response, jsonify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ok:
    """Successful outcome.  ``value`` is ``None`` when there is no payload."""

    value: Any = None


@dataclass(frozen=True)
class NotFound:
    """No row matched ``task_id``."""

    task_id: int

    @property
    def message(self) -> str:
        return f"Task {self.task_id} not found"


@dataclass(frozen=True)
class StoreError:
    """The database raised; ``message`` is the driver's error text."""

    message: str


StoreResult = Ok | NotFound | StoreError


def to_response(result: StoreResult) -> tuple[Response, int]:
    """
    Map an operation outcome to a JSON envelope and HTTP status code.

    Envelopes:
        * ``Ok`` -> 200 ``{"success": true}`` plus ``"data"`` when present.
        * ``NotFound`` -> 404 ``{"message": "Task <id> not found"}``.  This
          envelope carries no ``success`` key.
        * ``StoreError`` -> 500 ``{"success": false, "message": <text>}``.

    Raises:
        TypeError: If ``result`` is not one of the three variants.
    """
    if isinstance(result, Ok):
        if result.value is None:
            return jsonify({"success": True}), 200
        return jsonify({"success": True, "data": result.value}), 200

    if isinstance(result, NotFound):
        logger.warning("Task %s not found", result.task_id)
        return jsonify({"message": result.message}), 404

    if isinstance(result, StoreError):
        logger.error("Store failure: %s", result.message)
        return jsonify({"success": False, "message": result.message}), 500

    raise TypeError(f"Unsupported store result: {result!r}")

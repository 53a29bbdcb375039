"""
REST API Endpoints for the Task Service.

Exposes a CRUD interface for tasks.  Handlers are built by
``create_api_blueprint`` around an injected ``TaskStore``, parse and
validate the request, delegate to the store and map its result with
``to_response``.

Endpoints:
    GET    /tasks              - List all tasks ordered by task_id
    POST   /tasks              - Create a task
    GET    /tasks/<id>         - Retrieve a single task
    PATCH  /tasks/<id>         - Merge name/priority into a task
    DELETE /tasks/<id>         - Delete a task (no existence check)
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, Response, abort, jsonify, request
from werkzeug.exceptions import HTTPException
from werkzeug.routing import IntegerConverter

from ..results import to_response
from ..store import TaskStore

logger = logging.getLogger(__name__)

# task_id and priority are stored in 32-bit signed INTEGER columns.
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


# =====================================================================
# Helper Functions
# =====================================================================


def validate_task_data(
    data: Any, required_fields: list[str] | None = None
) -> tuple[bool, str | None]:
    """
    Validate an incoming task payload.

    Only presence and type are checked.  ``name`` may be any string,
    including the empty string; ``null`` counts as absent.  Unknown keys
    are ignored.

    Args:
        data: The deserialised JSON request body.
        required_fields: Field names that must be present and non-null.

    Returns:
        A two-element tuple ``(is_valid, error_message)``.  When valid,
        ``error_message`` is ``None``.
    """
    if not isinstance(data, dict):
        return False, "Request body must be a JSON object"

    for field in required_fields or []:
        if data.get(field) is None:
            return False, f"'{field}' is required"

    name = data.get("name")
    if name is not None and not isinstance(name, str):
        return False, "'name' must be a string"

    priority = data.get("priority")
    if priority is not None:
        # bool is a subclass of int; JSON true/false is not a priority.
        if isinstance(priority, bool) or not isinstance(priority, int):
            return False, "'priority' must be an integer"
        if not INT32_MIN <= priority <= INT32_MAX:
            return False, f"'priority' must be between {INT32_MIN} and {INT32_MAX}"

    return True, None


class TaskIdConverter(IntegerConverter):
    """Signed integer path segment limited to the 32-bit ``task_id`` column.

    Out-of-range values fail to match, so they never reach the store.
    """

    def __init__(self, map, *args, **kwargs) -> None:
        super().__init__(map, min=INT32_MIN, max=INT32_MAX, signed=True)


def _parse_json_body(required_fields: list[str] | None = None) -> dict[str, Any]:
    """
    Parse and validate the request body, aborting with a 4xx on failure.

    A non-JSON content type yields 415 and malformed JSON yields 400 (both
    raised by Flask); a structurally invalid payload yields 422.
    """
    data = request.get_json()
    is_valid, error = validate_task_data(data, required_fields=required_fields)
    if not is_valid:
        logger.warning("Validation failed: %s", error)
        abort(422, description=error)
    return data


def _error_envelope(error: HTTPException) -> tuple[Response, int]:
    return jsonify({"success": False, "message": error.description}), error.code


# =====================================================================
# Blueprint Factory
# =====================================================================


def create_api_blueprint(store: TaskStore) -> Blueprint:
    """
    Build the task API blueprint bound to ``store``.

    Args:
        store: Data-access object every handler in the blueprint uses.

    Returns:
        A blueprint exposing ``/tasks`` and ``/tasks/<task_id>``.
    """
    api_bp = Blueprint("task_api", __name__)

    # Registered before any rule below so "<task_id:...>" resolves.
    api_bp.record_once(
        lambda state: state.app.url_map.converters.setdefault("task_id", TaskIdConverter)
    )

    @api_bp.route("/tasks", methods=["GET"])
    def get_tasks() -> tuple[Response, int]:
        """List every task, ordered by ascending ``task_id``."""
        logger.info("GET /tasks - Fetching all tasks")
        return to_response(store.list_tasks())

    @api_bp.route("/tasks/<task_id:task_id>", methods=["GET"])
    def get_task(task_id: int) -> tuple[Response, int]:
        """Retrieve a single task, or 404 if it does not exist."""
        logger.info("GET /tasks/%s - Fetching task", task_id)
        return to_response(store.get_task(task_id))

    @api_bp.route("/tasks", methods=["POST"])
    def create_task() -> tuple[Response, int]:
        """
        Create a task.

        Request Body (JSON):
            name: Task name (required)
            priority: Integer priority (optional)

        Returns:
            ``{"success": true, "data": {"task_id": <id>}}`` with 200.
        """
        logger.info("POST /tasks - Creating new task")
        data = _parse_json_body(required_fields=["name"])
        return to_response(store.create_task(data["name"], data.get("priority")))

    @api_bp.route("/tasks/<task_id:task_id>", methods=["PATCH"])
    def update_task(task_id: int) -> tuple[Response, int]:
        """
        Partially update a task.

        Request Body (JSON):
            name: New name (optional)
            priority: New priority (optional)

        Omitted and ``null`` fields keep their stored values.
        """
        logger.info("PATCH /tasks/%s - Updating task", task_id)
        data = _parse_json_body()
        return to_response(
            store.update_task(task_id, name=data.get("name"), priority=data.get("priority"))
        )

    @api_bp.route("/tasks/<task_id:task_id>", methods=["DELETE"])
    def delete_task(task_id: int) -> tuple[Response, int]:
        """Delete a task; succeeds even when the task does not exist."""
        logger.info("DELETE /tasks/%s - Deleting task", task_id)
        return to_response(store.delete_task(task_id))

    # -----------------------------------------------------------------
    # Error Handlers
    # -----------------------------------------------------------------

    @api_bp.errorhandler(400)
    def bad_request(error: HTTPException) -> tuple[Response, int]:
        """Return a JSON 400 for malformed request bodies."""
        return _error_envelope(error)

    @api_bp.app_errorhandler(404)
    def route_not_found(error: HTTPException) -> tuple[Response, int]:
        """Return a JSON 404 for paths no route matches, e.g. out-of-range ids."""
        return _error_envelope(error)

    @api_bp.errorhandler(415)
    def unsupported_media_type(error: HTTPException) -> tuple[Response, int]:
        """Return a JSON 415 when the body is not sent as JSON."""
        return _error_envelope(error)

    @api_bp.errorhandler(422)
    def unprocessable_entity(error: HTTPException) -> tuple[Response, int]:
        """Return a JSON 422 for payloads that fail validation."""
        return _error_envelope(error)

    @api_bp.errorhandler(500)
    def internal_error(error: HTTPException) -> tuple[Response, int]:
        """Log the exception and return a JSON 500 Internal Server Error."""
        logger.error("Internal server error: %s", getattr(error, "original_exception", error))
        return jsonify({"success": False, "message": "Internal server error"}), 500

    return api_bp

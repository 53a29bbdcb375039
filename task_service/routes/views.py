"""Plain-text routes that sit outside the JSON API."""

from __future__ import annotations

from flask import Blueprint, Response

views_bp = Blueprint("views", __name__)


@views_bp.route("/", methods=["GET"])
def index() -> Response:
    """Liveness placeholder; always answers ``Hello, World``."""
    return Response("Hello, World\n", status=200, mimetype="text/plain")

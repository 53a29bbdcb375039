"""
Process entry point: ``python -m task_service`` or ``task-service``.

Builds the application (which connects to the database and fails fast if
it cannot), then serves on ``SERVER_ADDRESS`` with a threaded server so
each request runs in its own thread.  ``.env`` is loaded when
``task_service.config`` is imported.
"""

from __future__ import annotations

import logging
import os

from . import create_app
from .config import parse_server_address

logger = logging.getLogger("task_service")


def main() -> None:
    """Start the task service and block until it exits."""
    host, port = parse_server_address()
    app = create_app(os.environ.get("FLASK_ENV", "production"))

    logger.info("Listening on %s:%s", host, port)
    app.run(host=host, port=port, threaded=True, use_reloader=False)


if __name__ == "__main__":
    main()

"""
Task Service Flask Application Factory.

Provides the ``create_app`` factory function that assembles the task
service.  The factory builds the database engine, probes it once so an
unreachable database aborts startup, and hands a ``TaskStore`` wrapping
that engine to the API blueprint.

The service registers two blueprints:
  * **views_bp** -- plain-text liveness placeholder at ``/``.
  * **task_api** -- JSON CRUD endpoints under ``/tasks``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

from .config import get_config, load_database_url

db = SQLAlchemy()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _ensure_sqlite_db_parent_exists(database_uri: str) -> None:
    """Create parent directories for file-based SQLite URIs when missing."""
    sqlite_prefix = "sqlite:///"
    if not database_uri.startswith(sqlite_prefix):
        return

    sqlite_path = database_uri[len(sqlite_prefix) :].split("?", 1)[0]
    if sqlite_path == ":memory:":
        return

    db_parent = Path(sqlite_path).parent
    db_parent.mkdir(parents=True, exist_ok=True)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the task service application.

    Args:
        config_name: Optional configuration environment name
            (``"development"``, ``"testing"``, ``"production"``).  When
            *None*, the value is read from the ``FLASK_ENV`` environment
            variable, defaulting to ``"production"``.

    Returns:
        A fully configured Flask application instance ready to serve requests.

    Raises:
        RuntimeError: If ``DATABASE_URL`` is required but not set.
        sqlalchemy.exc.OperationalError: If the database cannot be reached.
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    # Keep task fields in column order (task_id, name, priority) in responses.
    app.json.sort_keys = False
    app.config["SQLALCHEMY_DATABASE_URI"] = load_database_url(
        testing=bool(app.config.get("TESTING"))
    )

    logger.info("Creating task service app with config: %s", config_class.__name__)

    _ensure_sqlite_db_parent_exists(app.config["SQLALCHEMY_DATABASE_URI"])

    db.init_app(app)

    from . import models  # noqa: F401  registers the tasks table on db.metadata
    from .routes.api import create_api_blueprint
    from .routes.views import views_bp
    from .store import TaskStore

    with app.app_context():
        engine = db.engine
        # Fail fast: an unreachable database must stop the process here.
        with engine.connect():
            pass
        logger.info("Connected to database %s", engine.url.render_as_string(hide_password=True))

        # The schema is owned by the database in production; development and
        # testing bootstrap it locally.
        if app.config["DEBUG"] or app.config["TESTING"]:
            db.create_all()
            logger.info("Task service database tables created")

    store = TaskStore(engine)
    app.extensions["task_store"] = store

    app.register_blueprint(views_bp)
    app.register_blueprint(create_api_blueprint(store))

    return app

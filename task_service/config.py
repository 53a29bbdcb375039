"""
Configuration Classes for the Task Service.

Centralises all environment-dependent settings (database URL, connection
pool bounds, listen address) into a hierarchy of configuration classes.
The base ``Config`` class defines the shared defaults, while subclasses
override only what differs per environment.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Values already present in the process environment take precedence over .env.
load_dotenv(override=False)

BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_SERVER_ADDRESS = "0.0.0.0:3000"
DEFAULT_DB_POOL_SIZE = 16
DEFAULT_DB_POOL_TIMEOUT = 3.0


def load_database_url(*, testing: bool) -> str:
    """
    Resolve the database connection URL for the selected environment.

    Testing falls back to a local SQLite file so the suite runs without a
    database server.  Every other environment requires ``DATABASE_URL``.

    Raises:
        RuntimeError: If ``DATABASE_URL`` is not set outside of testing.
    """
    if testing:
        return os.environ.get(
            "TEST_DATABASE_URL",
            f"sqlite:///{BASE_DIR / 'instance' / 'test_tasks.db'}?check_same_thread=False",
        )

    database_url = os.environ.get("DATABASE_URL", "").strip()
    if not database_url:
        raise RuntimeError("Missing database configuration: set DATABASE_URL.")
    return database_url


def parse_server_address(address: str | None = None) -> tuple[str, int]:
    """
    Split a ``host:port`` listen address into its parts.

    Args:
        address: The address to parse.  When ``None``, the
            ``SERVER_ADDRESS`` environment variable is used, defaulting to
            ``0.0.0.0:3000``.

    Returns:
        A ``(host, port)`` tuple.

    Raises:
        ValueError: If the address has no port or the port is not a valid
            TCP port number.
    """
    if address is None:
        address = os.environ.get("SERVER_ADDRESS", DEFAULT_SERVER_ADDRESS)

    host, sep, port_text = address.strip().rpartition(":")
    if not sep or not host or not port_text.isdigit():
        raise ValueError(f"Invalid SERVER_ADDRESS '{address}': expected host:port")

    port = int(port_text)
    if not 0 < port < 65536:
        raise ValueError(f"Invalid SERVER_ADDRESS '{address}': port out of range")

    # Bracketed IPv6 literals, e.g. "[::1]:3000".
    return host.strip("[]"), port


class Config:
    """
    Base configuration shared by every environment.

    Attributes:
        SQLALCHEMY_TRACK_MODIFICATIONS: Disabled to save memory.
        DB_POOL_SIZE: Upper bound on concurrently open database connections.
        DB_POOL_TIMEOUT: Seconds a request waits for a free connection
            before failing.
        SQLALCHEMY_ENGINE_OPTIONS: Engine keyword arguments.  The pool never
            grows past ``DB_POOL_SIZE`` (no overflow connections).
    """

    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False

    DB_POOL_SIZE: int = int(os.environ.get("DB_POOL_SIZE", DEFAULT_DB_POOL_SIZE))
    DB_POOL_TIMEOUT: float = float(os.environ.get("DB_POOL_TIMEOUT", DEFAULT_DB_POOL_TIMEOUT))

    SQLALCHEMY_ENGINE_OPTIONS: dict = {
        "pool_size": DB_POOL_SIZE,
        "max_overflow": 0,
        "pool_timeout": DB_POOL_TIMEOUT,
    }


class DevelopmentConfig(Config):
    """Development environment configuration with debug mode enabled."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """
    Testing environment configuration.

    Uses an isolated SQLite database file so that tests never touch a
    real deployment.  ``pool_pre_ping`` guards against connections left
    stale by tables being dropped between tests.
    """

    DEBUG: bool = True
    TESTING: bool = True
    SQLALCHEMY_ENGINE_OPTIONS: dict = {
        **Config.SQLALCHEMY_ENGINE_OPTIONS,
        "pool_pre_ping": True,
    }


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG: bool = False
    TESTING: bool = False


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": ProductionConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Look up and return the configuration class for the given environment.

    Args:
        env: Environment name (``"development"``, ``"testing"``,
            ``"production"``).  When ``None``, falls back to the
            ``FLASK_ENV`` environment variable, defaulting to
            ``"production"``.

    Returns:
        The configuration class (not an instance) for the environment.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "production")
    return config.get(env, config["default"])

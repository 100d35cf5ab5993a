"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration with a test
fallback (SQLite in-memory) and exposes FastAPI dependencies.
"""
import logging
import os
import sqlite3
import sys
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

SQLITE_MEMORY_URL = "sqlite+pysqlite:///:memory:"


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while a test runs, so at import time we
    also look for the pytest package in ``sys.modules``. ``PYTEST_RUNNING=1``
    forces the answer.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    return "pytest" in sys.modules


def _get_database_url() -> str:
    # If DATABASE_URL is explicitly set, use it
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    # Otherwise, generate from individual components (all must be set)
    db_user = os.getenv("POSTGRES_USER")
    db_password = os.getenv("POSTGRES_PASSWORD")
    db_host = os.getenv("POSTGRES_HOST")
    db_port = os.getenv("POSTGRES_PORT")
    db_name = os.getenv("POSTGRES_DB")

    if not all([db_user, db_password, db_host, db_port, db_name]):
        missing = []
        if not db_user: missing.append("POSTGRES_USER")
        if not db_password: missing.append("POSTGRES_PASSWORD")
        if not db_host: missing.append("POSTGRES_HOST")
        if not db_port: missing.append("POSTGRES_PORT")
        if not db_name: missing.append("POSTGRES_DB")
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


def _sqlite_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {}
    kwargs = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url:
        # StaticPool so the schema persists across connections
        kwargs["poolclass"] = StaticPool
    return kwargs


def resolve_database_url() -> str:
    """Pick the database URL for this process.

    1. ``SKILLBRIDGE_TEST_DB`` wins when set.
    2. Else ``TEST_DATABASE_URL`` (set by the PostgreSQL test fixtures).
    3. Else under pytest, an in-memory SQLite database.
    4. Else ``DATABASE_URL`` or the ``POSTGRES_*`` components.
    """
    explicit_test_db = os.getenv("SKILLBRIDGE_TEST_DB")
    if explicit_test_db:
        return explicit_test_db
    explicit_e2e_db = os.getenv("TEST_DATABASE_URL")
    if explicit_e2e_db:
        return explicit_e2e_db
    if _is_pytest_runtime():
        return SQLITE_MEMORY_URL
    return _get_database_url()


def build_engine(url: str) -> Engine:
    """Create an engine for ``url``; under pytest an unreachable server falls back to SQLite."""
    echo = os.getenv("SQL_ECHO", "false").lower() == "true"
    try:
        return create_engine(url, echo=echo, **_sqlite_kwargs(url))
    except OperationalError:
        if _is_pytest_runtime() and not os.getenv("TEST_DATABASE_URL") and not os.getenv("SKILLBRIDGE_TEST_DB"):
            logger.warning("database_fallback: %s unavailable, using in-memory sqlite", url)
            return create_engine(SQLITE_MEMORY_URL, echo=echo, **_sqlite_kwargs(SQLITE_MEMORY_URL))
        raise


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES clauses unless asked per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


DATABASE_URL = resolve_database_url()

engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_schema(bind=None):
    """Create all tables on ``bind`` (defaults to the module engine).

    Production schemas are managed by Alembic; this is for SQLite test runs
    and local experiments.
    """
    from skillbridge.db import models  # local import to avoid circular import at module load
    models.Base.metadata.create_all(bind=bind or engine)


def drop_schema(bind=None):
    from skillbridge.db import models
    models.Base.metadata.drop_all(bind=bind or engine)


def get_db():
    """Dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

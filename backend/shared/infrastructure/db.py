"""
Database configuration and session management.
Uses SQLAlchemy 2.0 patterns.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from shared.config.settings import settings


def _engine_options(url: str) -> dict[str, Any]:
    """
    Build engine keyword arguments for the given URL.

    SQLite has no server-side pool or connect timeout; every other backend
    gets the pool settings from configuration.
    """
    if url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "echo": settings.db_echo,
        }
    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_pool_timeout,
        "pool_recycle": settings.db_pool_recycle,
        "connect_args": {"connect_timeout": settings.db_connect_timeout},
        "echo": settings.db_echo,
    }


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """
    SQLite ignores FOREIGN KEY clauses unless the pragma is set per connection.
    """

    @event.listens_for(target, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, **overrides: Any) -> Engine:
    """Create an engine for ``url`` with the project's defaults applied."""
    options = _engine_options(url)
    options.update(overrides)
    new_engine = create_engine(url, **options)
    if url.startswith("sqlite"):
        enable_sqlite_foreign_keys(new_engine)
    return new_engine


engine = build_engine(settings.database_url)

# Session factory
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @router.get("/localities")
        def list_localities(db: Session = Depends(get_db)):
            return LocalityService(db).list_all()

    The session is automatically closed after the request completes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager for database sessions outside of FastAPI.

    Usage:
        with get_db_context() as db:
            LocalityService(db).list_all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def safe_commit(db: Session) -> None:
    """
    Safe commit with automatic rollback on failure.

    Raises the original exception after rolling back.
    """
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

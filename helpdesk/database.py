"""Database configuration and session management for the helpdesk service.

Exports:
- Base: declarative base for models
- engine: SQLAlchemy engine
- SessionLocal: session factory
- get_db: FastAPI dependency that yields a DB session
- init_db(): helper to create tables (calls Base.metadata.create_all)

Behavior:
- Reads DATABASE_URL from env, falls back to a local SQLite file `helpdesk.db` in the project root.
- Uses connect_args for SQLite to allow multi-threaded access in dev.
- Enables foreign keys on SQLite so message rows follow their ticket on delete.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

# Project root (two levels up from this file)
PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _default_sqlite_url() -> str:
    db_path = PROJECT_ROOT / "helpdesk.db"
    return f"sqlite:///{db_path.as_posix()}"


DATABASE_URL: str = os.getenv("DATABASE_URL", _default_sqlite_url())


def make_engine(url: str) -> Engine:
    """Build an engine for `url`; SQLite needs `check_same_thread=False` under uvicorn's threadpool."""
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False}, future=True)
    return create_engine(url, future=True, pool_pre_ping=True)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # ON DELETE CASCADE is a no-op in SQLite unless the pragma is set per connection
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = make_engine(DATABASE_URL)

# Session factory
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, class_=Session)

# Declarative base for models
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Yield a SQLAlchemy DB session for FastAPI dependencies.

    Usage:
        def endpoint(db: Session = Depends(get_db)):
            ...
    """
    db: Optional[Session] = None
    try:
        db = SessionLocal()
        yield db
    finally:
        if db is not None:
            db.close()


def safe_rollback(db: Session) -> None:
    """Roll back `db` after a failed statement; a dead connection is logged, not raised."""
    try:
        db.rollback()
    except SQLAlchemyError:
        logger.exception("Rollback failed")


def init_db(bind: Optional[Engine] = None) -> None:
    """Create all tables for the registered models.

    This will import `helpdesk.models` to ensure model classes are registered
    with `Base` before calling `Base.metadata.create_all()`.
    """
    try:
        # Import models to ensure they are registered on Base.metadata
        # (import here to avoid circular imports at module import time)
        import helpdesk.models  # noqa: F401

        logger.info("Creating database tables (if not exists)")
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database tables ready")
    except Exception as exc:
        logger.exception("Failed to initialize database: %s", exc)
        raise


__all__ = ["Base", "engine", "SessionLocal", "make_engine", "get_db", "safe_rollback", "init_db"]

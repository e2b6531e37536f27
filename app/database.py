"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the BookStore API.

We use SYNCHRONOUS SQLAlchemy. Route handlers are plain `def` functions,
which FastAPI runs in its worker threadpool, so each request still waits
on database I/O without blocking the event loop.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Repositories use that session for all operations in the request
3. Each mutating repository call commits (or rolls back) its own change
4. Close session when request ends

This is implemented using FastAPI's dependency injection.
"""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# Key parameters:
# - pool_size / max_overflow: connection pool sizing (server databases only)
# - pool_pre_ping: Test connection health before using
# - echo: Log all SQL statements in debug mode

def _engine_options(database_url: str) -> dict:
    """Build create_engine() keyword arguments for the configured backend."""
    options: dict = {"echo": settings.debug}
    if make_url(database_url).get_backend_name() == "sqlite":
        # SQLite connections are shared with FastAPI's worker threads
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
        )
    return options


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))


# =============================================================================
# Session Factory
# =============================================================================
# - autocommit=False: repositories decide when to commit
# - autoflush=False: don't auto-flush before queries (more predictable)
# - expire_on_commit=False: entities stay readable after a repository commit,
#   so handlers can map them to response schemas

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover models for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, code after yield closes it.
    The finally block ensures cleanup happens even if an exception occurs.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    WARNING: In production, use Alembic migrations instead!
    """
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Never use in production.
    """
    Base.metadata.drop_all(bind=engine)

"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the catalog's persisted state:
three collections (users, authors, books) plus the ordered genre rows
that belong to each book.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives -> create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

Work that outlives the request (the best-effort author counter update)
opens its own session from the factory returned by get_session_factory().
"""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from catalog_api.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# Built once at import time and shared by every request.
# - pool_pre_ping: Test connection health before using (prevents stale connections)
# - echo: Log all SQL statements in debug mode

engine = create_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=True,
    echo=settings.debug,
)


# =============================================================================
# Session Factory
# =============================================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Creates a session for the request and closes it when the request
    ends, even if an exception occurs.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory() -> sessionmaker:
    """
    Session factory dependency for background work.

    Background tasks run after the request session is closed, so they
    receive the factory and open a session of their own.
    """
    return SessionLocal


def safe_database_url() -> str:
    """Return the configured database URL with the password hidden."""
    return make_url(settings.database_url).render_as_string(hide_password=True)


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    WARNING: In production, use Alembic migrations instead!
    """
    Base.metadata.create_all(bind=engine)


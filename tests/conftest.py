"""
pytest Fixtures for Book Catalog Tests

Shared fixtures used across all test files.

For database tests, we use:
- session scope for the engine (expensive to create)
- function scope for the connection and its outer transaction, which is
  rolled back after each test
- a session factory bound to that connection, so every request session,
  background task session and fixture session sees the same data
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Connection, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from catalog_api.database import Base, get_db, get_session_factory
from catalog_api.main import app
from catalog_api.models import Author, Book, User
from catalog_api.services.security import TokenIdentity, get_token_service, hash_password

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory: fast, isolated, no external database needed.
# StaticPool keeps the single connection alive for the whole session.


@pytest.fixture(scope="session")
def engine():
    """Create a SQLite in-memory database engine with all tables."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def connection(engine) -> Generator[Connection, None, None]:
    """Connection wrapped in a transaction that is rolled back after the test."""
    connection = engine.connect()
    transaction = connection.begin()

    yield connection

    if transaction.is_active:
        transaction.rollback()
    connection.close()


@pytest.fixture
def session_factory(connection: Connection) -> sessionmaker:
    """Session factory bound to the test connection."""
    return sessionmaker(autocommit=False, autoflush=False, bind=connection)


@pytest.fixture
def db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """Session for fixtures and direct assertions."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory: sessionmaker) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    get_db yields a fresh session per request (session per request) and
    get_session_factory hands background tasks the same bound factory.
    """

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_user(db_session: Session) -> User:
    """User 'alice' holding the default credential 'qwer'."""
    user = User(
        username="alice",
        favorite_genre="refactoring",
        hashed_password=hash_password("qwer"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_token(sample_user: User) -> str:
    """Bearer token for sample_user."""
    return get_token_service().issue(
        TokenIdentity(username=sample_user.username, id=str(sample_user.id))
    )


@pytest.fixture
def sample_author(db_session: Session) -> Author:
    author = Author(name="Robert Martin", book_count=0)
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_books(db_session: Session, sample_author: Author) -> list[Book]:
    """Three books across two authors with overlapping genres."""
    fowler = Author(name="Martin Fowler", born=1963, book_count=0)
    books = [
        Book(title="Clean Code", published=2008, author=sample_author,
             genres=["refactoring"]),
        Book(title="Agile software development", published=2002, author=sample_author,
             genres=["agile", "patterns", "design"]),
        Book(title="Refactoring, edition 2", published=2018, author=fowler,
             genres=["refactoring", "design"]),
    ]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books

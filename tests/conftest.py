"""
pytest Fixtures for BookStore API Tests

This file contains shared fixtures used across all test files.

FIXTURE SCOPES:
- session scope for the engine (expensive to create)
- function scope for sessions (isolation between tests)
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"

from collections.abc import Generator
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import Author, Book, Role, User
from app.services.security import create_access_token, hash_password

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory: fast, isolated, no external database needed.
# Foreign keys are switched on so ON DELETE SET NULL behaves as in PostgreSQL.


@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the single connection alive for the whole session;
    without it the in-memory database would vanish between connections.

    The connect/begin listeners take transaction control away from the
    pysqlite driver so SAVEPOINTs work, which lets each test roll back
    cleanly even after a repository rollback.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session runs inside an outer transaction that is rolled back
    after the test. Repository commits only release SAVEPOINTs
    (join_transaction_mode="create_savepoint"), so nothing leaks between
    tests.
    """
    connection = engine.connect()
    transaction = connection.begin()

    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=connection,
        join_transaction_mode="create_savepoint",
    )
    session = TestSessionLocal()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    The get_db dependency is overridden to hand out the test session.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def error_client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Test client that returns 500 responses instead of re-raising.

    Starlette re-raises unhandled exceptions after the catch-all handler
    builds its response; raise_server_exceptions=False lets tests inspect
    that response.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# USER FIXTURES
# =============================================================================
@pytest.fixture
def admin_user(db_session: Session) -> User:
    """Create a user holding the Administrator role."""
    user = User(
        email="admin@bookstore.com",
        hashed_password=hash_password("AdminPass123"),
        roles=Role.ADMINISTRATOR.value,
        is_active=True,
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def customer_user(db_session: Session) -> User:
    """Create a user holding only the Customer role."""
    user = User(
        email="customer@bookstore.com",
        hashed_password=hash_password("CustomerPass123"),
        roles=Role.CUSTOMER.value,
        is_active=True,
    )
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def admin_headers(admin_user: User) -> dict[str, str]:
    """Authorization header for the administrator."""
    return {"Authorization": f"Bearer {create_access_token(admin_user)}"}


@pytest.fixture
def customer_headers(customer_user: User) -> dict[str, str]:
    """Authorization header for the customer."""
    return {"Authorization": f"Bearer {create_access_token(customer_user)}"}


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author for testing."""
    author = Author(
        first_name="George",
        last_name="Orwell",
        bio="English novelist and essayist, journalist and critic.",
    )
    db_session.add(author)
    db_session.commit()
    return author


@pytest.fixture
def sample_book(db_session: Session, sample_author: Author) -> Book:
    """Create a sample book written by sample_author."""
    book = Book(
        title="1984",
        year=1949,
        isbn="9780451524935",
        summary="A dystopian novel set in a totalitarian society.",
        image="1984.jpg",
        price=Decimal("12.99"),
        author_id=sample_author.id,
    )
    db_session.add(book)
    db_session.commit()
    return book


@pytest.fixture
def multiple_books(db_session: Session, sample_author: Author) -> list[Book]:
    """Create several books, alternating between authored and anonymous."""
    books = []
    for i in range(5):
        book = Book(
            title=f"Test Book {i + 1}",
            year=2000 + i,
            author_id=sample_author.id if i % 2 == 0 else None,
        )
        books.append(book)
        db_session.add(book)

    db_session.commit()
    return books

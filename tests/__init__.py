"""
Test Suite for BookStore API

Test Organization:
- conftest.py: Shared fixtures (test database, clients, users, sample data)
- test_books.py: Tests for /api/books endpoints
- test_authors.py: Tests for /api/authors endpoints
- test_users.py: Tests for /api/users registration, login and tokens
- test_repositories.py: Repository results against the test database
- test_mapping.py: Entity <-> schema mapper

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run specific test
    pytest tests/test_books.py::TestCreateBook::test_create_book_minimal

    # Run with verbose output
    pytest -v
"""

"""
Tests for Books API Endpoints

This module tests all CRUD operations for the /api/books endpoints.

TEST NAMING CONVENTION:
- test_<action>_<scenario>
- Examples: test_create_book_success, test_get_book_not_found
"""

from fastapi import status

from app.repositories import BookRepository, RepositoryResult
from app.utils import GENERIC_ERROR_MESSAGE


class TestListBooks:
    """Tests for GET /api/books endpoint."""

    def test_list_books_empty(self, client):
        """An empty store returns 200 with an empty array."""
        response = client.get("/api/books")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []

    def test_list_books_with_data(self, client, sample_book):
        """Test listing books returns expected data."""
        response = client.get("/api/books")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert len(data) == 1
        assert data[0]["title"] == "1984"
        assert data[0]["author"]["lastName"] == "Orwell"

    def test_list_books_ordered_by_id(self, client, multiple_books):
        """Books come back in id order, all of them, without pagination."""
        response = client.get("/api/books")

        data = response.json()
        assert [book["id"] for book in data] == sorted(b.id for b in multiple_books)
        assert data[1]["author"] is None

    def test_list_books_is_anonymous(self, client, sample_book):
        """Reading requires no token."""
        response = client.get("/api/books", headers={})

        assert response.status_code == status.HTTP_200_OK


class TestGetBook:
    """Tests for GET /api/books/{book_id} endpoint."""

    def test_get_book_success(self, client, sample_book, sample_author):
        """Test getting a book by ID, with camelCase field names."""
        response = client.get(f"/api/books/{sample_book.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == sample_book.id
        assert data["title"] == "1984"
        assert data["year"] == 1949
        assert data["isbn"] == "9780451524935"
        assert data["image"] == "1984.jpg"
        assert data["price"] == "12.99"
        assert data["authorId"] == sample_author.id
        assert data["author"] == {
            "id": sample_author.id,
            "firstName": "George",
            "lastName": "Orwell",
        }

    def test_get_book_not_found(self, client):
        """A missing book returns 404 with an empty body."""
        response = client.get("/api/books/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.content == b""

    def test_get_book_non_integer_id(self, client):
        """A non-numeric id matches no route."""
        response = client.get("/api/books/abc")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_get_book_id_beyond_key_range(self, client):
        """Ids too large for the primary key are simply not found."""
        response = client.get(f"/api/books/{2**63}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.content == b""


class TestCreateBook:
    """Tests for POST /api/books endpoint."""

    def test_create_book_requires_token(self, client):
        """Without a token the request is rejected before validation."""
        response = client.post("/api/books", json={"title": "New Book"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["www-authenticate"] == "Bearer"

    def test_create_book_requires_administrator(self, client, customer_headers):
        """A customer token is authenticated but not authorized."""
        response = client.post(
            "/api/books",
            json={"title": "New Book"},
            headers=customer_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_create_book_invalid_token(self, client):
        """A garbage token is treated like a missing one."""
        response = client.post(
            "/api/books",
            json={"title": "New Book"},
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_create_book_minimal(self, client, admin_headers):
        """Test creating a book with only required fields."""
        response = client.post(
            "/api/books",
            json={"title": "New Book"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["title"] == "New Book"
        assert data["id"] is not None
        assert data["author"] is None
        assert response.headers["location"].endswith(f"/api/books/{data['id']}")

    def test_create_book_full(self, client, admin_headers, sample_author, db_session):
        """Every submitted field is stored and returned."""
        book_data = {
            "title": "Animal Farm",
            "year": 1945,
            "isbn": "978-0-451-52634-2",
            "summary": "An allegorical novella.",
            "image": "animal-farm.png",
            "price": "9.99",
            "authorId": sample_author.id,
        }

        response = client.post("/api/books", json=book_data, headers=admin_headers)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["isbn"] == "9780451526342"  # Hyphens stripped
        assert data["author"]["firstName"] == "George"

        stored = BookRepository(db_session).find_by_id(data["id"])
        assert stored.title == "Animal Farm"
        assert stored.year == 1945
        assert stored.summary == "An allegorical novella."
        assert stored.image == "animal-farm.png"
        assert str(stored.price) == "9.99"
        assert stored.author_id == sample_author.id

    def test_create_book_unknown_author(self, client, admin_headers):
        """An authorId that matches no author is rejected with field detail."""
        response = client.post(
            "/api/books",
            json={"title": "Orphan", "authorId": 4242},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["field"] == "authorId"

    def test_create_book_missing_title(self, client, admin_headers):
        """Schema-invalid bodies return 400 naming the field."""
        response = client.post("/api/books", json={"year": 2000}, headers=admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        fields = [error["field"] for error in response.json()["errors"]]
        assert "title" in fields

    def test_create_book_null_body(self, client, admin_headers):
        """A null body is a bad request."""
        response = client.post(
            "/api/books",
            content="null",
            headers={**admin_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_book_invalid_isbn(self, client, admin_headers):
        """ISBNs must have 10 or 13 characters."""
        response = client.post(
            "/api/books",
            json={"title": "Bad ISBN", "isbn": "12345"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_book_whitespace_title(self, client, admin_headers):
        """A blank title is rejected."""
        response = client.post("/api/books", json={"title": "   "}, headers=admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestUpdateBook:
    """Tests for PUT /api/books/{book_id} endpoint."""

    def test_update_book_success(self, client, admin_headers, sample_book, db_session):
        """PUT replaces every field and returns 204 with no body."""
        response = client.put(
            f"/api/books/{sample_book.id}",
            json={"id": sample_book.id, "title": "Nineteen Eighty-Four", "year": 1950},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""

        stored = BookRepository(db_session).find_by_id(sample_book.id)
        assert stored.title == "Nineteen Eighty-Four"
        assert stored.year == 1950
        # Omitted fields are replaced too
        assert stored.isbn is None
        assert stored.author_id is None

    def test_update_book_id_mismatch(self, client, admin_headers, sample_book, db_session):
        """A body id different from the URL id is rejected and nothing changes."""
        response = client.put(
            f"/api/books/{sample_book.id}",
            json={"id": sample_book.id + 1, "title": "Changed"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert BookRepository(db_session).find_by_id(sample_book.id).title == "1984"

    def test_update_book_non_positive_id(self, client, admin_headers):
        """Route ids below 1 are rejected before any lookup."""
        response = client.put(
            "/api/books/0",
            json={"id": 0, "title": "Zero"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_book_not_found(self, client, admin_headers):
        """Test updating a non-existent book returns 404."""
        response = client.put(
            "/api/books/99999",
            json={"id": 99999, "title": "Ghost"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_book_without_changes(self, client, admin_headers, sample_book, sample_author):
        """Resubmitting identical values is still a successful update."""
        response = client.put(
            f"/api/books/{sample_book.id}",
            json={
                "id": sample_book.id,
                "title": "1984",
                "year": 1949,
                "isbn": "9780451524935",
                "summary": "A dystopian novel set in a totalitarian society.",
                "image": "1984.jpg",
                "price": "12.99",
                "authorId": sample_author.id,
            },
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT

    def test_update_book_unknown_author(self, client, admin_headers, sample_book):
        """Pointing a book at a missing author is rejected."""
        response = client.put(
            f"/api/books/{sample_book.id}",
            json={"id": sample_book.id, "title": "1984", "authorId": 4242},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_book_requires_administrator(self, client, customer_headers, sample_book):
        """Customers cannot update books."""
        response = client.put(
            f"/api/books/{sample_book.id}",
            json={"id": sample_book.id, "title": "Hacked"},
            headers=customer_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestDeleteBook:
    """Tests for DELETE /api/books/{book_id} endpoint."""

    def test_delete_book_success(self, client, admin_headers, sample_book, db_session):
        """Test deleting a book successfully."""
        response = client.delete(f"/api/books/{sample_book.id}", headers=admin_headers)

        assert response.status_code == status.HTTP_204_NO_CONTENT

        get_response = client.get(f"/api/books/{sample_book.id}")
        assert get_response.status_code == status.HTTP_404_NOT_FOUND
        assert BookRepository(db_session).exists(sample_book.id) is False

    def test_delete_book_not_found(self, client, admin_headers):
        """Test deleting a non-existent book returns 404."""
        response = client.delete("/api/books/99999", headers=admin_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_book_id_beyond_key_range(self, client, admin_headers):
        """Ids too large for the primary key are not found."""
        response = client.delete(f"/api/books/{2**63}", headers=admin_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_book_non_positive_id(self, client, admin_headers):
        """Route ids below 1 are a bad request."""
        response = client.delete("/api/books/0", headers=admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_book_non_integer_id(self, client, admin_headers):
        """Negative and non-numeric ids match no route."""
        for book_id in ("-1", "abc"):
            response = client.delete(f"/api/books/{book_id}", headers=admin_headers)

            assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_book_requires_token(self, client, sample_book):
        """Anonymous callers cannot delete."""
        response = client.delete(f"/api/books/{sample_book.id}")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestBookErrors:
    """Server-side failures surface as the generic 500 response."""

    def test_unexpected_exception_returns_generic_message(
        self, error_client, monkeypatch
    ):
        """Exception details are logged, never returned."""
        def explode(self):
            raise RuntimeError("connection string leaked here")

        monkeypatch.setattr(BookRepository, "find_all", explode)

        response = error_client.get("/api/books")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == GENERIC_ERROR_MESSAGE
        assert "leaked" not in response.text

    def test_repository_failure_returns_generic_message(
        self, client, admin_headers, monkeypatch
    ):
        """A FAILED repository result maps to 500."""
        monkeypatch.setattr(
            BookRepository,
            "create",
            lambda self, entity: RepositoryResult.FAILED,
        )

        response = client.post("/api/books", json={"title": "Doomed"}, headers=admin_headers)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == GENERIC_ERROR_MESSAGE

    def test_repository_conflict_returns_409(
        self, client, admin_headers, monkeypatch
    ):
        """A CONFLICT repository result maps to 409."""
        monkeypatch.setattr(
            BookRepository,
            "create",
            lambda self, entity: RepositoryResult.CONFLICT,
        )

        response = client.post("/api/books", json={"title": "Clash"}, headers=admin_headers)

        assert response.status_code == status.HTTP_409_CONFLICT


class TestCreateThenRead:
    """Round trip through the API."""

    def test_created_book_matches_submission(self, client, admin_headers, sample_author):
        """What was submitted is what comes back from a subsequent GET."""
        submitted = {
            "title": "Homage to Catalonia",
            "year": 1938,
            "isbn": "0156421178",
            "summary": "Orwell's account of the Spanish Civil War.",
            "price": "10.50",
            "authorId": sample_author.id,
        }

        created = client.post("/api/books", json=submitted, headers=admin_headers).json()
        fetched = client.get(f"/api/books/{created['id']}").json()

        for field, value in submitted.items():
            assert fetched[field] == value

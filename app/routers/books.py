"""
Books Router

CRUD endpoints for books.

Each handler follows the same linear flow:
1. Log the attempt
2. Validate the request (route/body id agreement, referenced author)
3. For update/delete, check the book exists (404 otherwise)
4. Delegate to the repository and translate a failed result
5. Map the entity to a response schema and log success

Reads are anonymous. Create, update and delete require the
Administrator role (AdminUser dependency), checked before the handler
body runs.

Unexpected exceptions are not caught here; the application-level
handlers in app.main log them and return the generic 500 response.
"""

from fastapi import APIRouter, Request, Response, status

from app.dependencies import AdminUser, AuthorRepo, BookRepo, EntityMapper, RequestLog
from app.models import Book
from app.schemas import BookCreate, BookResponse, BookUpdate
from app.utils import bad_request, not_found, repository_failure

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        500: {"description": "Unexpected server error"},
    },
)


# =============================================================================
# Helper Functions
# =============================================================================
def check_author_reference(
    author_id: int | None,
    authors: AuthorRepo,
    log: RequestLog,
) -> Response | None:
    """
    Reject a book whose authorId points at no author.

    Returns a 400 response to send back, or None when the reference is
    absent or valid.
    """
    if author_id is None or authors.exists(author_id):
        return None
    return bad_request(
        log,
        f"Author with id: {author_id} does not exist",
        errors=[{"field": "authorId", "message": f"Author {author_id} not found"}],
    )


# =============================================================================
# CRUD Endpoints
# =============================================================================
@router.get(
    "",
    response_model=list[BookResponse],
    summary="List all books",
    description="Get every book in the store, ordered by id.",
)
def list_books(
    books: BookRepo,
    mapper: EntityMapper,
    log: RequestLog,
) -> list[BookResponse]:
    """List all books. An empty store returns an empty list."""
    log.info("Attempted call")
    response = mapper.map_many(books.find_all(), BookResponse)
    log.info(f"Successful, {len(response)} records")
    return response


@router.get(
    "/{book_id:int}",
    response_model=BookResponse,
    summary="Get a book by ID",
    description="Retrieve a single book with its author.",
    responses={404: {"description": "Book not found"}},
)
def get_book(
    book_id: int,
    books: BookRepo,
    mapper: EntityMapper,
    log: RequestLog,
) -> BookResponse | Response:
    """Get a single book by its ID."""
    log.info(f"Attempted call for id: {book_id}")
    book = books.find_by_id(book_id)
    if book is None:
        return not_found(log, f"Failed to retrieve record with id: {book_id}")

    response = mapper.map(book, BookResponse)
    log.info(f"Successfully got record with id: {book_id}")
    return response


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    description="Create a new book. Requires the Administrator role.",
    responses={
        400: {"description": "Invalid book data"},
        401: {"description": "Missing or invalid token"},
        403: {"description": "Administrator role required"},
    },
)
def create_book(
    request: Request,
    response: Response,
    book_data: BookCreate,
    books: BookRepo,
    authors: AuthorRepo,
    mapper: EntityMapper,
    log: RequestLog,
    _: AdminUser,
) -> BookResponse | Response:
    """
    Create a new book.

    Returns 201 with the stored book (including its generated id) and a
    Location header pointing at it.
    """
    log.info("Create attempted")

    rejected = check_author_reference(book_data.author_id, authors, log)
    if rejected is not None:
        return rejected

    book = mapper.map(book_data, Book)
    result = books.create(book)
    if not result.ok:
        return repository_failure(log, result, "Create book failed")

    created = books.find_by_id(book.id)
    response.headers["Location"] = str(request.url_for("get_book", book_id=book.id))
    log.info(f"Create book was successful, id: {book.id}")
    return mapper.map(created, BookResponse)


@router.put(
    "/{book_id:int}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Update a book",
    description=(
        "Replace an existing book. The id in the body must match the URL. "
        "Requires the Administrator role."
    ),
    responses={
        400: {"description": "Invalid data or id mismatch"},
        401: {"description": "Missing or invalid token"},
        403: {"description": "Administrator role required"},
        404: {"description": "Book not found"},
    },
)
def update_book(
    book_id: int,
    book_data: BookUpdate,
    books: BookRepo,
    authors: AuthorRepo,
    mapper: EntityMapper,
    log: RequestLog,
    _: AdminUser,
) -> Response:
    """
    Update an existing book.

    PUT semantics: every field is replaced by the submitted value.
    An update that changes nothing still succeeds with 204.
    """
    log.info(f"Update attempted for id: {book_id}")

    if book_id < 1 or book_id != book_data.id:
        return bad_request(
            log,
            "Bad request was submitted, id does not match the URL",
            errors=[{"field": "id", "message": f"Expected id {book_id}"}],
        )

    if not books.exists(book_id):
        return not_found(log, f"Book with id: {book_id} not found")

    rejected = check_author_reference(book_data.author_id, authors, log)
    if rejected is not None:
        return rejected

    result = books.update(mapper.map(book_data, Book))
    if not result.ok:
        return repository_failure(log, result, "Update book failed")

    log.info(f"Book with id: {book_id} updated ({result.value})")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{book_id:int}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a book",
    description="Permanently delete a book. Requires the Administrator role.",
    responses={
        400: {"description": "Invalid id"},
        401: {"description": "Missing or invalid token"},
        403: {"description": "Administrator role required"},
        404: {"description": "Book not found"},
    },
)
def delete_book(
    book_id: int,
    books: BookRepo,
    log: RequestLog,
    _: AdminUser,
) -> Response:
    """Delete a book. Returns 204 No Content on success."""
    log.info(f"Delete attempted for id: {book_id}")

    if book_id < 1:
        return bad_request(
            log,
            "Bad request was submitted, id less than 1",
            errors=[{"field": "id", "message": "Must be a positive integer"}],
        )

    book = books.find_by_id(book_id)
    if book is None:
        return not_found(log, f"Book with id: {book_id} not found")

    result = books.delete(book)
    if not result.ok:
        return repository_failure(log, result, "Delete book failed")

    log.info(f"Book with id: {book_id} deleted")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

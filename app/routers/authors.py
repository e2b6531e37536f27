"""
Authors Router

CRUD endpoints for authors.
Follows the same patterns as the books router.

Deleting an author keeps the author's books; their authorId becomes null.
"""

from fastapi import APIRouter, Request, Response, status

from app.dependencies import AdminUser, AuthorRepo, EntityMapper, RequestLog
from app.models import Author
from app.schemas import AuthorCreate, AuthorResponse, AuthorUpdate
from app.utils import bad_request, not_found, repository_failure

router = APIRouter(
    prefix="/authors",
    tags=["Authors"],
    responses={
        500: {"description": "Unexpected server error"},
    },
)


@router.get(
    "",
    response_model=list[AuthorResponse],
    summary="List all authors",
    description="Get every author in the store with their books.",
)
def list_authors(
    authors: AuthorRepo,
    mapper: EntityMapper,
    log: RequestLog,
) -> list[AuthorResponse]:
    """List all authors."""
    log.info("Attempted get all authors")
    response = mapper.map_many(authors.find_all(), AuthorResponse)
    log.info(f"Successfully got all authors, {len(response)} records")
    return response


@router.get(
    "/{author_id:int}",
    response_model=AuthorResponse,
    summary="Get an author by ID",
    description="Retrieve a single author with their books.",
    responses={404: {"description": "Author not found"}},
)
def get_author(
    author_id: int,
    authors: AuthorRepo,
    mapper: EntityMapper,
    log: RequestLog,
) -> AuthorResponse | Response:
    """Get a single author by ID."""
    log.info(f"Attempted to get author with id: {author_id}")
    author = authors.find_by_id(author_id)
    if author is None:
        return not_found(log, f"Author not found for id: {author_id}")

    response = mapper.map(author, AuthorResponse)
    log.info(f"Successfully got author with id: {author_id}")
    return response


@router.post(
    "",
    response_model=AuthorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new author",
    description="Create a new author. Requires the Administrator role.",
    responses={
        400: {"description": "Invalid author data"},
        401: {"description": "Missing or invalid token"},
        403: {"description": "Administrator role required"},
    },
)
def create_author(
    request: Request,
    response: Response,
    author_data: AuthorCreate,
    authors: AuthorRepo,
    mapper: EntityMapper,
    log: RequestLog,
    _: AdminUser,
) -> AuthorResponse | Response:
    """Create a new author."""
    log.info("Author submission attempted")

    author = mapper.map(author_data, Author)
    result = authors.create(author)
    if not result.ok:
        return repository_failure(log, result, "Author creation failed")

    created = authors.find_by_id(author.id)
    response.headers["Location"] = str(
        request.url_for("get_author", author_id=author.id)
    )
    log.info(f"Author created, id: {author.id}")
    return mapper.map(created, AuthorResponse)


@router.put(
    "/{author_id:int}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Update an author",
    description=(
        "Replace an existing author. The id in the body must match the URL. "
        "Requires the Administrator role."
    ),
    responses={
        400: {"description": "Invalid data or id mismatch"},
        401: {"description": "Missing or invalid token"},
        403: {"description": "Administrator role required"},
        404: {"description": "Author not found"},
    },
)
def update_author(
    author_id: int,
    author_data: AuthorUpdate,
    authors: AuthorRepo,
    mapper: EntityMapper,
    log: RequestLog,
    _: AdminUser,
) -> Response:
    """Update an existing author."""
    log.info(f"Author update attempted for id: {author_id}")

    if author_id < 1 or author_id != author_data.id:
        return bad_request(
            log,
            "Bad request was submitted, id does not match the URL",
            errors=[{"field": "id", "message": f"Expected id {author_id}"}],
        )

    if not authors.exists(author_id):
        return not_found(log, f"Author with id: {author_id} not found")

    result = authors.update(mapper.map(author_data, Author))
    if not result.ok:
        return repository_failure(log, result, "Update author failed")

    log.info(f"Author with id: {author_id} updated ({result.value})")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{author_id:int}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete an author",
    description="Permanently delete an author. Requires the Administrator role.",
    responses={
        400: {"description": "Invalid id"},
        401: {"description": "Missing or invalid token"},
        403: {"description": "Administrator role required"},
        404: {"description": "Author not found"},
    },
)
def delete_author(
    author_id: int,
    authors: AuthorRepo,
    log: RequestLog,
    _: AdminUser,
) -> Response:
    """Delete an author."""
    log.info(f"Author delete attempted for id: {author_id}")

    if author_id < 1:
        return bad_request(
            log,
            "Bad request was submitted, id less than 1",
            errors=[{"field": "id", "message": "Must be a positive integer"}],
        )

    author = authors.find_by_id(author_id)
    if author is None:
        return not_found(log, f"Author with id: {author_id} not found")

    result = authors.delete(author)
    if not result.ok:
        return repository_failure(log, result, "Delete author failed")

    log.info(f"Author with id: {author_id} deleted")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

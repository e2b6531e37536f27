"""
Author Pydantic Schemas

These schemas define the shape of data for Author-related API operations.

- AuthorCreate: body of POST /authors (no id, the store assigns it)
- AuthorUpdate: body of PUT /authors/{id}; carries the id, which must
  match the route, and replaces every field
- AuthorResponse: what the API returns, including the author's books
"""

from pydantic import Field, field_validator

from app.schemas.common import BookSummary, CamelModel


class AuthorBase(CamelModel):
    """
    Base schema with shared author fields.

    Contains fields common to create, update, and response schemas.
    """

    first_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Author's first name",
        examples=["George", "Jane"],
    )

    last_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Author's last name",
        examples=["Orwell", "Austen"],
    )

    bio: str | None = Field(
        default=None,
        max_length=5000,
        description="Author biography",
        examples=["English novelist and essayist, journalist and critic..."],
    )

    @field_validator("first_name", "last_name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        """
        Validate that a name part is not just whitespace.

        Raises:
            ValueError: If the value is blank
        """
        if not v.strip():
            raise ValueError("Name cannot be empty or whitespace")
        return v.strip()


class AuthorCreate(AuthorBase):
    """
    Schema for creating a new author.

    Example request body:
    {
        "firstName": "Jane",
        "lastName": "Doe"
    }
    """
    pass


class AuthorUpdate(AuthorBase):
    """
    Schema for updating an existing author.

    PUT semantics: every field is replaced, so the same fields as
    AuthorCreate are required, plus the id of the author being updated.
    """

    id: int = Field(
        ...,
        description="Identifier of the author being updated (must match the URL)",
        examples=[1],
    )


class AuthorResponse(AuthorBase):
    """Schema for author responses (what the API returns)."""

    id: int = Field(
        ...,
        description="Unique identifier",
        examples=[1, 42],
    )

    books: list[BookSummary] = Field(
        default=[],
        description="Books written by this author",
    )

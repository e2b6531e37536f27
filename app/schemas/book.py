"""
Book Pydantic Schemas

Handles:
- ISBN validation (ISBN-10 or ISBN-13, hyphens stripped)
- Year and price bounds
- The nested author in responses
"""

import re
from decimal import Decimal

from pydantic import Field, field_validator

from app.schemas.common import AuthorSummary, CamelModel


class BookBase(CamelModel):
    """
    Base schema with shared book fields.

    Contains validation for:
    - ISBN format (ISBN-10 or ISBN-13)
    - Year (positive, four digits at most)
    - Price (non-negative)
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["1984", "Pride and Prejudice"],
    )

    year: int | None = Field(
        default=None,
        ge=1,
        le=9999,
        description="Year of publication",
        examples=[1949],
    )

    isbn: str | None = Field(
        default=None,
        max_length=20,
        description="ISBN-10 or ISBN-13",
        examples=["978-0451524935", "0-06-112008-1"],
    )

    summary: str | None = Field(
        default=None,
        max_length=5000,
        description="Book summary",
        examples=["A dystopian novel set in a totalitarian society..."],
    )

    image: str | None = Field(
        default=None,
        max_length=255,
        description="Cover image filename",
        examples=["1984.jpg"],
    )

    price: Decimal | None = Field(
        default=None,
        ge=0,
        le=Decimal("9999.99"),
        description="Book price",
        examples=["12.99"],
    )

    author_id: int | None = Field(
        default=None,
        ge=1,
        description="Identifier of the book's author",
        examples=[1],
    )

    @field_validator("isbn")
    @classmethod
    def validate_isbn(cls, v: str | None) -> str | None:
        """
        Validate ISBN format.

        Accepts:
        - ISBN-10: 10 characters, last can be X
        - ISBN-13: 13 digits

        ISBNs can include hyphens, which we strip for storage.
        """
        if v is None:
            return v

        cleaned = re.sub(r"[-\s]", "", v)

        if len(cleaned) == 10:
            if not re.match(r"^\d{9}[\dX]$", cleaned):
                raise ValueError(
                    "Invalid ISBN-10 format. Must be 10 characters: "
                    "9 digits followed by a digit or 'X'"
                )
        elif len(cleaned) == 13:
            if not cleaned.isdigit():
                raise ValueError(
                    "Invalid ISBN-13 format. Must be exactly 13 digits"
                )
        else:
            raise ValueError(
                "ISBN must be either 10 or 13 characters "
                "(excluding hyphens)"
            )

        return cleaned

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str) -> str:
        """Validate and normalize title."""
        if not v.strip():
            raise ValueError("Title cannot be empty or whitespace")
        return v.strip()


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    Example request body:
    {
        "title": "1984",
        "year": 1949,
        "isbn": "978-0451524935",
        "authorId": 1
    }
    """
    pass


class BookUpdate(BookBase):
    """
    Schema for updating an existing book.

    PUT semantics: the whole record is replaced. Fields left out are
    reset to their defaults, so clients send the complete book.
    """

    id: int = Field(
        ...,
        description="Identifier of the book being updated (must match the URL)",
        examples=[1],
    )


class BookResponse(BookBase):
    """
    Schema for book responses.

    Includes the database id and the nested author, so clients get the
    author's name without an extra request.
    """

    id: int = Field(..., description="Unique identifier")

    author: AuthorSummary | None = Field(
        default=None,
        description="The book's author, if any",
    )

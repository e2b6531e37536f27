"""
Shared Schema Building Blocks

CamelModel gives every API schema camelCase names on the wire
("firstName", "authorId") while Python code keeps snake_case attributes.
Both spellings are accepted on input.

The Summary schemas are the nested shapes used inside responses:
a book lists its author as an AuthorSummary and an author lists its
books as BookSummary items. Keeping them here avoids a circular import
between author.py and book.py.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema with camelCase aliases and ORM attribute loading."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AuthorSummary(CamelModel):
    """Author as embedded in a book response."""

    id: int = Field(..., description="Unique identifier")
    first_name: str = Field(..., description="Author's first name")
    last_name: str = Field(..., description="Author's last name")


class BookSummary(CamelModel):
    """Book as embedded in an author response."""

    id: int = Field(..., description="Unique identifier")
    title: str = Field(..., description="Book title")
    year: int | None = Field(default=None, description="Year of publication")
    isbn: str | None = Field(default=None, description="ISBN-10 or ISBN-13")
    price: Decimal | None = Field(default=None, description="Book price")

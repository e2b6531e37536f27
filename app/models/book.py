"""
Book Model

The central model of the BookStore API.

A book has at most one author, referenced through the author_id foreign key.
The relationship is lazily loaded; repositories eager-load it for reads.
"""

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.author import Author


class Book(Base):
    """
    Book model representing books in the store.

    Table: books

    Fields:
    - title: Book title (required)
    - year: Publication year
    - isbn: International Standard Book Number
    - summary: Short description
    - image: Cover image filename
    - price: Price with 2 decimal precision
    - author_id: Foreign key to authors.id (optional)

    Example:
        book = Book(
            title="1984",
            year=1949,
            isbn="9780451524935",
            summary="A dystopian novel...",
            author_id=orwell.id,
        )
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    year: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Year of publication"
    )

    isbn: Mapped[str | None] = mapped_column(
        String(20),
        index=True,
        nullable=True,
        comment="International Standard Book Number"
    )

    summary: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Book summary"
    )

    image: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Cover image filename"
    )

    # Numeric(10, 2) for currency; Decimal avoids float rounding
    price: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 2),
        nullable=True,
        comment="Book price"
    )

    # -------------------------------------------------------------------------
    # Foreign Keys
    # -------------------------------------------------------------------------
    author_id: Mapped[int | None] = mapped_column(
        ForeignKey("authors.id", ondelete="SET NULL"),
        index=True,
        nullable=True,
        comment="Author of the book"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    author: Mapped["Author | None"] = relationship(
        "Author",
        back_populates="books",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', isbn='{self.isbn}')"

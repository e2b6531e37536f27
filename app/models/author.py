"""
Author Model

Represents an author in the bookstore database.

SQLAlchemy 2.0 Features Used:
- mapped_column(): New way to define columns with full type support
- Mapped[]: Type hint wrapper for SQLAlchemy columns
- relationship(): Define relationships between models
- back_populates: Two-way relationship binding
"""

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

# TYPE_CHECKING is True only during type checking (mypy, IDE)
# This prevents circular imports at runtime while enabling type hints
if TYPE_CHECKING:
    from app.models.book import Book


class Author(Base):
    """
    Author model representing writers in the bookstore.

    Table: authors

    Relationships:
    - books: One-to-Many back reference. Books point at their author through
      books.author_id; the author does not own them, so deleting an author
      leaves its books in place with author_id set to NULL.

    Example:
        author = Author(
            first_name="George",
            last_name="Orwell",
            bio="English novelist and essayist...",
        )
    """

    __tablename__ = "authors"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    # Assigned by the database, never by the API
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Author's first name"
    )

    last_name: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Author's last name"
    )

    bio: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Author biography"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    # On delete the ORM sets author_id to NULL on the loaded books;
    # ON DELETE SET NULL covers rows changed outside the ORM
    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="author",
    )

    def __repr__(self) -> str:
        return (
            f"Author(id={self.id}, first_name='{self.first_name}', "
            f"last_name='{self.last_name}')"
        )

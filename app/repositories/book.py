"""
Book Repository

Reads eager-load the book's author so handlers can build the nested
author summary without lazy loads.
"""

from sqlalchemy.orm import selectinload

from app.models import Book
from app.repositories.base import Repository


class BookRepository(Repository[Book]):
    """Persistence operations for Book."""

    model = Book

    def _read_options(self):
        return (selectinload(Book.author),)

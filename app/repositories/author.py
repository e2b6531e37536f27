"""
Author Repository

Reads eager-load the author's books for the nested book list.
"""

from sqlalchemy.orm import selectinload

from app.models import Author
from app.repositories.base import Repository


class AuthorRepository(Repository[Author]):
    """Persistence operations for Author."""

    model = Author

    def _read_options(self):
        return (selectinload(Author.books),)

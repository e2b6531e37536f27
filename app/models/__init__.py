"""
SQLAlchemy Models Package

This package contains all database models for the BookStore API.

Model Relationships:
- Author <-> Book: One-to-Many (an author writes many books,
                   a book has at most one author)

Import all models here to:
1. Make them available as: from app.models import Book, Author
2. Ensure Alembic discovers them for migrations
"""

from app.models.author import Author
from app.models.book import Book
from app.models.user import Role, User

__all__ = [
    "Author",
    "Book",
    "Role",
    "User",
]

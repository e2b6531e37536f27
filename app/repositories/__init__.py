"""
Repositories Package

One repository per entity type, each built on the generic Repository in
base.py. Routers never touch the Session directly; they receive a
repository through dependency injection (see app.dependencies).
"""

from app.repositories.author import AuthorRepository
from app.repositories.base import Repository, RepositoryResult
from app.repositories.book import BookRepository
from app.repositories.user import UserRepository

__all__ = [
    "Repository",
    "RepositoryResult",
    "AuthorRepository",
    "BookRepository",
    "UserRepository",
]

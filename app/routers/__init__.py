"""
API Routers Package

This package contains FastAPI routers that handle API endpoints.

Router Structure:
- books.py: /api/books/* endpoints
- authors.py: /api/authors/* endpoints
- users.py: /api/users/* endpoints (registration, login)

Each router is imported and registered in main.py.
"""

from app.routers.authors import router as authors_router
from app.routers.books import router as books_router
from app.routers.users import router as users_router

__all__ = [
    "books_router",
    "authors_router",
    "users_router",
]

"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Security: Control exactly what data is exposed in API responses
2. Validation: Different rules for create vs update vs response
3. Decoupling: Database schema can evolve independently of API

Schema Naming Convention:
- XxxCreate: Fields accepted when creating a new record
- XxxUpdate: Full replacement of a record, including its id
- XxxResponse: Fields returned in API responses
- XxxSummary: Compact shape nested inside another resource's response
"""

from app.schemas.author import (
    AuthorBase,
    AuthorCreate,
    AuthorResponse,
    AuthorUpdate,
)
from app.schemas.book import (
    BookBase,
    BookCreate,
    BookResponse,
    BookUpdate,
)
from app.schemas.common import AuthorSummary, BookSummary, CamelModel
from app.schemas.user import (
    LoginRequest,
    TokenResponse,
    UserCreate,
    UserResponse,
)

__all__ = [
    "CamelModel",
    # Author schemas
    "AuthorBase",
    "AuthorCreate",
    "AuthorUpdate",
    "AuthorResponse",
    "AuthorSummary",
    # Book schemas
    "BookBase",
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "BookSummary",
    # User schemas
    "UserCreate",
    "UserResponse",
    "LoginRequest",
    "TokenResponse",
]

"""
BookStore API Application Package

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions (repositories, logger, roles)
- mapping.py: Entity <-> schema mapper
- models/: SQLAlchemy ORM models
- repositories/: Generic repository and per-entity subclasses
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Password hashing and access tokens
- utils/: Error response helpers
"""

__version__ = "1.0.0"

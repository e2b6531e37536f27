"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Everything a handler needs arrives through here rather than through
module-level singletons:
- DbSession: the per-request SQLAlchemy session
- BookRepo / AuthorRepo / UserRepo: repositories bound to that session
- EntityMapper: the configured entity <-> schema mapper
- RequestLog: a logger that prefixes messages with the handler location
- AdminUser: the authenticated user, guaranteed to hold the Administrator role
"""

import logging
from collections.abc import Iterable
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.database import get_db
from app.mapping import Mapper, get_mapper
from app.models.user import Role, User
from app.repositories import AuthorRepository, BookRepository, UserRepository
from app.services.security import decode_access_token

# =============================================================================
# Database and Repositories
# =============================================================================
DbSession = Annotated[Session, Depends(get_db)]


def get_book_repository(db: DbSession) -> BookRepository:
    return BookRepository(db)


def get_author_repository(db: DbSession) -> AuthorRepository:
    return AuthorRepository(db)


def get_user_repository(db: DbSession) -> UserRepository:
    return UserRepository(db)


BookRepo = Annotated[BookRepository, Depends(get_book_repository)]
AuthorRepo = Annotated[AuthorRepository, Depends(get_author_repository)]
UserRepo = Annotated[UserRepository, Depends(get_user_repository)]

EntityMapper = Annotated[Mapper, Depends(get_mapper)]


# =============================================================================
# Request-Scoped Logging
# =============================================================================
class LocationAdapter(logging.LoggerAdapter):
    """Prefix every message with the handler location, e.g. "Books - get_book"."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        return f"{self.extra['location']}: {msg}", kwargs


def get_request_logger(request: Request) -> LocationAdapter:
    """
    Build a logger for the handler serving this request.

    The location is derived from the matched endpoint: the router module
    name ("books" -> "Books") and the handler function name.
    """
    endpoint = request.scope.get("endpoint")
    if endpoint is None:
        return LocationAdapter(logging.getLogger("app"), {"location": request.url.path})

    module = endpoint.__module__
    resource = module.rsplit(".", 1)[-1].capitalize()
    location = f"{resource} - {endpoint.__name__}"
    return LocationAdapter(logging.getLogger(module), {"location": location})


RequestLog = Annotated[LocationAdapter, Depends(get_request_logger)]


# =============================================================================
# JWT Authentication
# =============================================================================
# HTTPBearer extracts the token from "Authorization: Bearer <token>".
# auto_error=False so a missing header is reported as 401 by us,
# consistently with an invalid token.
bearer_scheme = HTTPBearer(auto_error=False)


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_token_payload(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    """
    Decode the bearer token.

    Raises:
        HTTPException: 401 if the token is missing, malformed or expired
    """
    if credentials is None:
        raise _credentials_exception()

    payload = decode_access_token(credentials.credentials)
    if payload is None or payload.get("sub") is None:
        raise _credentials_exception()

    return payload


def get_current_user(
    users: UserRepo,
    payload: dict = Depends(get_token_payload),
) -> User:
    """
    Look up the user named by the token.

    Raises:
        HTTPException: 401 if the user no longer exists or is inactive
    """
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise _credentials_exception()

    user = users.find_by_id(user_id)
    if user is None or not user.is_active:
        raise _credentials_exception()

    return user


class RoleChecker:
    """
    Dependency that requires at least one of the given roles.

    Roles are read from the token's "roles" claim, so a role change takes
    effect when the user next logs in.

    Usage:
        require_admin = RoleChecker([Role.ADMINISTRATOR])

        @router.post("/", dependencies=[Depends(require_admin)])
        def create_thing(...): ...
    """

    def __init__(self, roles: Iterable[Role | str]) -> None:
        self.roles = {role.value if isinstance(role, Role) else role for role in roles}

    def __call__(
        self,
        user: User = Depends(get_current_user),
        payload: dict = Depends(get_token_payload),
    ) -> User:
        granted = set(payload.get("roles") or [])
        if not granted & self.roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {', '.join(sorted(self.roles))}",
            )
        return user


require_administrator = RoleChecker([Role.ADMINISTRATOR])

AdminUser = Annotated[User, Depends(require_administrator)]

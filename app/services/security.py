"""
Security Service

Handles password hashing and JWT token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib)
2. JWT access tokens carrying the user's roles as a claim
3. Secure password verification

Usage:
    from app.services.security import create_access_token, decode_access_token

    token = create_access_token(user)
    payload = decode_access_token(token)
    payload["roles"]  # ["Administrator"]
"""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings
from app.models.user import User

logger = logging.getLogger(__name__)

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
# deprecated="auto" means old hashes are automatically upgraded
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Example:
        >>> hashed = hash_password("SecurePass123")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Uses constant-time comparison to prevent timing attacks.
    """
    return pwd_context.verify(plain_password, hashed_password)


# -------------------------------------------------------------------------
# JWT Token Configuration
# -------------------------------------------------------------------------
ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"


def create_access_token(
    user: User,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token for a user.

    Claims:
    - sub: user id (a string, as RFC 7519 requires)
    - email: the user's email
    - roles: list of role names, checked by role-protected endpoints
    - exp: expiry timestamp
    - type: always "access"

    Args:
        user: The authenticated user
        expires_delta: Optional custom lifetime

    Returns:
        Encoded JWT token string
    """
    settings = get_settings()

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "roles": user.role_list,
        "exp": datetime.now(UTC) + expires_delta,
        "type": ACCESS_TOKEN_TYPE,
    }

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=ALGORITHM,
    )


def decode_access_token(token: str) -> dict | None:
    """
    Decode and validate an access token.

    Returns:
        Decoded payload if valid, None if invalid, expired or not an access token
    """
    try:
        payload = jwt.decode(
            token,
            get_settings().secret_key,
            algorithms=[ALGORITHM],
        )
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        logger.warning(f"Token type mismatch: expected {ACCESS_TOKEN_TYPE}")
        return None

    return payload

"""
Users Router

Account endpoints:
- Registration (email/password, always the Customer role)
- Login (email/password → JWT access token with role claims)

Administrator accounts are not created here; use scripts/seed_data.py.

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- Access tokens carry the user's roles; mutating book/author
  endpoints require the Administrator role
"""

from fastapi import APIRouter, HTTPException, Response, status

from app.config import get_settings
from app.dependencies import RequestLog, UserRepo
from app.models.user import Role, User
from app.schemas.user import LoginRequest, TokenResponse, UserCreate, UserResponse
from app.services.security import create_access_token, hash_password, verify_password
from app.utils import repository_failure

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={
        400: {"description": "Bad request"},
    },
)


# -------------------------------------------------------------------------
# Registration Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="""
    Create a new customer account with email and password.

    **Password Requirements:**
    - Minimum 8 characters
    - At least 1 uppercase letter
    - At least 1 lowercase letter
    - At least 1 number
    """,
    responses={409: {"description": "Email already registered"}},
)
def register(
    user_data: UserCreate,
    users: UserRepo,
    log: RequestLog,
) -> UserResponse | Response:
    """
    Register a new user.

    1. Validates email and password format (handled by Pydantic)
    2. Checks for a duplicate email
    3. Hashes the password with bcrypt
    4. Creates the user with the Customer role
    """
    log.info("Registration attempted")
    email = user_data.email.lower()

    if users.find_by_email(email) is not None:
        log.warning(f"Registration rejected, email already registered: {email}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )

    user = User(
        email=email,
        hashed_password=hash_password(user_data.password),
        roles=Role.CUSTOMER.value,
        is_active=True,
    )
    result = users.create(user)
    if not result.ok:
        return repository_failure(log, result, "User registration failed")

    log.info(f"New user registered: {email}")
    return UserResponse.model_validate(user)


# -------------------------------------------------------------------------
# Login Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with email and password",
    description="""
    Authenticate with email and password to receive a JWT access token.

    **Usage:**
    Include the access token in the Authorization header:
    ```
    Authorization: Bearer <access_token>
    ```
    """,
    responses={401: {"description": "Incorrect email or password"}},
)
def login(
    credentials: LoginRequest,
    users: UserRepo,
    log: RequestLog,
) -> TokenResponse:
    """Authenticate a user and return an access token."""
    email = credentials.email.lower()
    log.info(f"Login attempted for {email}")

    user = users.find_by_email(email)

    if user is None or not verify_password(credentials.password, user.hashed_password):
        log.warning(f"Login failed for {email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        log.warning(f"Login failed, inactive account: {email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is inactive",
            headers={"WWW-Authenticate": "Bearer"},
        )

    settings = get_settings()
    log.info(f"Login successful for {email}")
    return TokenResponse(
        access_token=create_access_token(user),
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60,
    )

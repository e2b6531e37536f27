"""
User Pydantic Schemas

Schemas:
- UserCreate: Registration data (email, password)
- UserResponse: Public user data (never exposes the password hash)
- LoginRequest: Credentials exchanged for a token
- TokenResponse: The issued bearer token

These keep OAuth2-style snake_case names (access_token, token_type),
so they extend BaseModel directly rather than CamelModel.
"""

import re

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserCreate(BaseModel):
    """Schema for user registration."""

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["jane@example.com"],
    )

    password: str = Field(
        ...,
        min_length=8,
        max_length=72,
        description="Password (min 8 chars, must include uppercase and number)",
        examples=["SecurePass123"],
    )

    @field_validator("password")
    @classmethod
    def password_must_be_strong(cls, v: str) -> str:
        """
        Validate password strength.

        Requirements:
        - At least 8 characters (enforced by min_length)
        - At least 1 uppercase letter
        - At least 1 lowercase letter
        - At least 1 number
        """
        if not re.search(r"[A-Z]", v):
            raise ValueError("Password must contain at least one uppercase letter")
        if not re.search(r"[a-z]", v):
            raise ValueError("Password must contain at least one lowercase letter")
        if not re.search(r"\d", v):
            raise ValueError("Password must contain at least one number")
        return v


class UserResponse(BaseModel):
    """
    Schema for user responses.

    SECURITY: Never includes password or sensitive internal fields.
    """

    id: int = Field(..., description="Unique user identifier")
    email: EmailStr = Field(..., description="User's email address")
    roles: list[str] = Field(
        ...,
        validation_alias="role_list",
        description="Roles granted to the user",
    )

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "email": "jane@example.com",
                "roles": ["Customer"],
            }
        },
    )


class LoginRequest(BaseModel):
    """Credentials for POST /users/login."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class TokenResponse(BaseModel):
    """
    Schema for the login response.

    Clients send the token back as: Authorization: Bearer <access_token>
    """

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")

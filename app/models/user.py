"""
User Model

Represents an account that can sign in and receive a JWT access token.
Roles travel inside the token as a claim; mutating endpoints require
the Administrator role.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Role(str, Enum):
    """
    Roles known to the system.

    - ADMINISTRATOR: May create, update and delete books and authors
    - CUSTOMER: Default role for self-registered users
    """
    ADMINISTRATOR = "Administrator"
    CUSTOMER = "Customer"


class User(Base):
    """
    User model for authentication.

    Table: users

    roles is stored as a comma-separated string ("Administrator,Customer")
    and exposed as a list through role_list.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="User's email address (used for login)"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    roles: Mapped[str] = mapped_column(
        String(255),
        default=Role.CUSTOMER.value,
        nullable=False,
        comment="Comma-separated role names"
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
        comment="Whether the account is active"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="When the user registered"
    )

    @property
    def role_list(self) -> list[str]:
        """Roles as a list, empty entries dropped."""
        return [role.strip() for role in self.roles.split(",") if role.strip()]

    def __repr__(self) -> str:
        return f"User(id={self.id}, email='{self.email}', roles='{self.roles}')"

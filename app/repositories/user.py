"""User Repository"""

from sqlalchemy import select

from app.models import User
from app.repositories.base import Repository


class UserRepository(Repository[User]):
    """Persistence operations for User, plus lookup by email."""

    model = User

    def find_by_email(self, email: str) -> User | None:
        """Return the user registered with this email, or None."""
        stmt = select(User).where(User.email == email.lower())
        return self.db.execute(stmt).scalar_one_or_none()

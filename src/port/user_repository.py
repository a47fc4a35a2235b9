from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Mutations on an unknown id raise NotFoundError.
    """
    def create(self, email: str, password_hash: str, name: str | None = None) -> User:
        """Create a new user. Raise DuplicateError if the email is taken."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by exact email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def update_name(self, user_id: str, name: str | None) -> User:
        """Set the display name and return the updated User."""
        ...

    def update_password_hash(self, user_id: str, password_hash: str) -> None:
        """Replace the stored password hash."""
        ...

    def delete_by_id(self, user_id: str) -> None:
        """Delete a user."""
        ...

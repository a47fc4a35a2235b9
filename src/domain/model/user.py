from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Domain model representing a user."""
    id: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    name: str | None = None

    def to_public(self) -> 'PublicUser':
        """Project the user without credentials."""
        return PublicUser(
            id=self.id,
            email=self.email,
            name=self.name,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


@dataclass(frozen=True)
class PublicUser:
    """User as seen outside the persistence boundary (no password hash)."""
    id: str
    email: str
    name: str | None
    created_at: datetime
    updated_at: datetime

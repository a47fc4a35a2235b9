"""In-memory implementation of UserRepository for testing."""

import uuid
from datetime import datetime, timezone

from domain.model.errors import DuplicateError, NotFoundError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, password_hash: str, name: str | None = None) -> User:
        if any(u.email == email for u in self.store.values()):
            raise DuplicateError(email)

        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)

        user = User(
            id=user_id,
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
            name=name,
        )
        self.store[user_id] = user
        return user

    def update_name(self, user_id: str, name: str | None) -> User:
        user = self._require(user_id)
        user.name = name
        user.updated_at = datetime.now(timezone.utc)
        return user

    def update_password_hash(self, user_id: str, password_hash: str) -> None:
        user = self._require(user_id)
        user.password_hash = password_hash
        user.updated_at = datetime.now(timezone.utc)

    def delete_by_id(self, user_id: str) -> None:
        self._require(user_id)
        del self.store[user_id]

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)

    def _require(self, user_id: str) -> User:
        user = self.store.get(user_id)
        if not user:
            raise NotFoundError('User not found')
        return user

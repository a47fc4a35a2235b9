"""User use cases — registration, authentication, profile, password change.

Pure business logic with no HTTP dependencies. Each service receives its
collaborators in ``__init__`` and exposes ``execute(input)``. Domain errors
propagate unchanged; route handlers map them to HTTP status codes.
"""

import logging
import re
from dataclasses import dataclass

from domain.model.errors import DuplicateError, NotFoundError, ValidationError
from domain.model.task import UNSET, Unset
from domain.model.user import PublicUser
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


@dataclass
class RegisterUserInput:
    email: str
    password: str
    name: str | None = None


@dataclass
class AuthenticateUserInput:
    email: str
    password: str


@dataclass(frozen=True)
class AuthResult:
    """Successful authentication."""
    user: PublicUser


@dataclass
class GetProfileInput:
    user_id: str


@dataclass
class UpdateProfileInput:
    """Fields left as UNSET are not changed."""
    user_id: str
    name: str | None | Unset = UNSET


@dataclass
class ChangePasswordInput:
    user_id: str
    current_password: str
    new_password: str


def normalize_email(email: str | None) -> str:
    return (email or '').strip().lower()


def _normalize_name(name: str | None) -> str | None:
    if name is None:
        return None
    return name.strip() or None


class RegisterUserService:
    def __init__(self, users: UserRepository, hasher: PasswordHasher):
        self.users = users
        self.hasher = hasher

    def execute(self, data: RegisterUserInput) -> PublicUser:
        """Register a new user.

        Raises:
            ValidationError: malformed email, short password, or email in use
        """
        email = normalize_email(data.email)
        if not email or not EMAIL_PATTERN.match(email):
            raise ValidationError('Invalid email')
        if not data.password or len(data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')

        if self.users.get_by_email(email):
            raise ValidationError('Email already in use')

        password_hash = self.hasher.hash(data.password)
        try:
            user = self.users.create(
                email=email,
                password_hash=password_hash,
                name=_normalize_name(data.name),
            )
        except DuplicateError as e:
            # Lost a race with a concurrent registration
            raise ValidationError('Email already in use') from e

        logger.info("User registered", extra={"userId": user.id})
        return user.to_public()


class AuthenticateUserService:
    """Check credentials.

    Returns None for both an unknown email and a wrong password so callers
    cannot tell which half of the credentials was wrong.
    """

    def __init__(self, users: UserRepository, hasher: PasswordHasher):
        self.users = users
        self.hasher = hasher

    def execute(self, data: AuthenticateUserInput) -> AuthResult | None:
        email = normalize_email(data.email)
        if not email or not (data.password or '').strip():
            raise ValidationError('Email and password are required')

        user = self.users.get_by_email(email)
        if not user:
            # Unknown emails cost one key derivation, like a wrong password
            self.hasher.hash(data.password)
            return None
        if not self.hasher.compare(data.password, user.password_hash):
            return None

        return AuthResult(user=user.to_public())


class GetCurrentUserProfileService:
    def __init__(self, users: UserRepository):
        self.users = users

    def execute(self, data: GetProfileInput) -> PublicUser:
        user = self.users.get_by_id(data.user_id)
        if not user:
            raise NotFoundError('User not found')
        return user.to_public()


class UpdateProfileService:
    def __init__(self, users: UserRepository):
        self.users = users

    def execute(self, data: UpdateProfileInput) -> PublicUser:
        """Set the display name. A blank or null name clears it."""
        user = self.users.get_by_id(data.user_id)
        if not user:
            raise NotFoundError('User not found')
        if data.name is UNSET:
            return user.to_public()

        user = self.users.update_name(data.user_id, _normalize_name(data.name))
        logger.info("User profile updated", extra={"userId": user.id})
        return user.to_public()


class ChangePasswordService:
    def __init__(self, users: UserRepository, hasher: PasswordHasher):
        self.users = users
        self.hasher = hasher

    def execute(self, data: ChangePasswordInput) -> None:
        """Replace the password after verifying the current one.

        Raises:
            ValidationError: new password too short, or current password wrong
            NotFoundError: user does not exist
        """
        if not data.new_password or len(data.new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f'New password must be at least {MIN_PASSWORD_LENGTH} characters')

        user = self.users.get_by_id(data.user_id)
        if not user:
            raise NotFoundError('User not found')

        if not self.hasher.compare(data.current_password, user.password_hash):
            raise ValidationError('Current password is incorrect')

        self.users.update_password_hash(data.user_id, self.hasher.hash(data.new_password))
        logger.info("Password changed", extra={"userId": data.user_id})

"""Port definition for password hashing."""

from typing import Protocol


class PasswordHasher(Protocol):
    """One-way salted hashing. Two hashes of one plaintext differ but both verify."""

    def hash(self, plaintext: str) -> str: ...

    def compare(self, plaintext: str, hashed: str) -> bool: ...

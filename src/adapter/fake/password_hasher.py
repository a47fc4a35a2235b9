"""In-memory implementation of PasswordHasher for testing.

Salted like the real thing so two hashes of one password differ,
but cheap enough for unit tests.
"""

import hashlib
import secrets

PREFIX = 'fake'


class FakePasswordHasher:
    def __init__(self):
        self.hash_calls = 0

    def hash(self, plaintext: str) -> str:
        self.hash_calls += 1
        salt = secrets.token_hex(8)
        return f"{PREFIX}${salt}${self._digest(salt, plaintext)}"

    def compare(self, plaintext: str, hashed: str) -> bool:
        parts = hashed.split('$')
        if len(parts) != 3 or parts[0] != PREFIX:
            return False
        _, salt, digest = parts
        return secrets.compare_digest(digest, self._digest(salt, plaintext))

    @staticmethod
    def _digest(salt: str, plaintext: str) -> str:
        return hashlib.sha256(f"{salt}:{plaintext}".encode('utf-8')).hexdigest()

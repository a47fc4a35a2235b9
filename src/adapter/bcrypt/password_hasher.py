"""bcrypt implementation of PasswordHasher."""

from logging import getLogger

import bcrypt

logger = getLogger(__name__)

# 2^12 = 4096 iterations
BCRYPT_ROUNDS = 12

# bcrypt only reads the first 72 bytes; newer releases reject longer input.
BCRYPT_MAX_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode('utf-8')[:BCRYPT_MAX_BYTES]


class BcryptPasswordHasher:
    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(plaintext), salt).decode('utf-8')

    def compare(self, plaintext: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(plaintext), hashed.encode('utf-8'))
        except ValueError:
            logger.warning("Stored password hash is not a bcrypt hash")
            return False

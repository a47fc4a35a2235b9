"""Unit tests for BcryptPasswordHasher."""

import unittest

from adapter.bcrypt.password_hasher import BcryptPasswordHasher


class TestBcryptPasswordHasher(unittest.TestCase):

    def setUp(self):
        # Minimum cost keeps the suite fast
        self.hasher = BcryptPasswordHasher(rounds=4)

    def test_hash_is_not_plaintext(self):
        hashed = self.hasher.hash('password123')
        self.assertNotEqual(hashed, 'password123')
        self.assertTrue(hashed.startswith('$2b$04$'))

    def test_same_plaintext_hashes_differ_but_both_verify(self):
        first = self.hasher.hash('password123')
        second = self.hasher.hash('password123')

        self.assertNotEqual(first, second)
        self.assertTrue(self.hasher.compare('password123', first))
        self.assertTrue(self.hasher.compare('password123', second))

    def test_compare_wrong_password(self):
        hashed = self.hasher.hash('password123')
        self.assertFalse(self.hasher.compare('wrong-password', hashed))

    def test_compare_malformed_hash_returns_false(self):
        self.assertFalse(self.hasher.compare('password123', 'plain-text-not-bcrypt'))

    def test_long_password_is_accepted(self):
        password = 'x' * 200
        hashed = self.hasher.hash(password)
        self.assertTrue(self.hasher.compare(password, hashed))

    def test_default_rounds(self):
        self.assertEqual(BcryptPasswordHasher().rounds, 12)


if __name__ == '__main__':
    unittest.main()

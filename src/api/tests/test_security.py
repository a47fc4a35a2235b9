"""Tests for JWT creation and verification."""

import unittest
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from api.security import (
    JWT_ALGORITHM,
    JWT_SECRET_KEY,
    create_access_token,
    get_current_user_id,
    verify_token,
)


class TestTokens(unittest.TestCase):

    def test_round_trip_subject(self):
        self.assertEqual(verify_token(create_access_token('user-1')), 'user-1')

    def test_expired_token_is_rejected(self):
        past = datetime.now(timezone.utc) - timedelta(days=1)
        token = jwt.encode({'sub': 'user-1', 'exp': past}, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)

        self.assertIsNone(verify_token(token))

    def test_token_signed_with_other_key_is_rejected(self):
        token = jwt.encode({'sub': 'user-1'}, 'another-key', algorithm=JWT_ALGORITHM)

        self.assertIsNone(verify_token(token))


class TestGetCurrentUserId(unittest.TestCase):

    def test_missing_credentials_is_401(self):
        with self.assertRaises(HTTPException) as context:
            get_current_user_id(None)
        self.assertEqual(context.exception.status_code, 401)

    def test_token_without_subject_is_401(self):
        token = jwt.encode({'iat': datetime.now(timezone.utc)}, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)
        credentials = HTTPAuthorizationCredentials(scheme='Bearer', credentials=token)

        with self.assertRaises(HTTPException) as context:
            get_current_user_id(credentials)
        self.assertEqual(context.exception.status_code, 401)

    def test_valid_token_yields_user_id(self):
        credentials = HTTPAuthorizationCredentials(scheme='Bearer', credentials=create_access_token('user-7'))

        self.assertEqual(get_current_user_id(credentials), 'user-7')


if __name__ == '__main__':
    unittest.main()

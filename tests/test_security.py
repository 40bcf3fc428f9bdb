"""Unit tests for gatehouse.core.security: bcrypt hashing and JWT issue/verify."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from gatehouse.core.security import (
    InvalidTokenError,
    PasswordHashError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from gatehouse.models import Role

SECRET = "unit-test-secret"


class TestPasswordHashing(unittest.TestCase):
    """hash_password salts every call; verify_password is the only way to compare."""

    def test_verify_accepts_matching_password(self) -> None:
        hashed = hash_password("secret")
        self.assertTrue(verify_password("secret", hashed))

    def test_verify_rejects_wrong_password(self) -> None:
        hashed = hash_password("secret")
        self.assertFalse(verify_password("Secret", hashed))

    def test_same_password_hashes_differently(self) -> None:
        first = hash_password("secret")
        second = hash_password("secret")
        self.assertNotEqual(first, second)
        self.assertTrue(verify_password("secret", first))
        self.assertTrue(verify_password("secret", second))

    def test_hash_does_not_contain_plaintext(self) -> None:
        self.assertNotIn("hunter22", hash_password("hunter22"))

    def test_long_password_is_truncated_consistently(self) -> None:
        long_pw = "p" * 100
        hashed = hash_password(long_pw)
        self.assertTrue(verify_password(long_pw, hashed))

    def test_malformed_hash_raises(self) -> None:
        with self.assertRaises(PasswordHashError):
            verify_password("secret", "not-a-bcrypt-hash")


class TestAccessToken(unittest.TestCase):
    """create_access_token / decode_access_token round trip and rejection cases."""

    def test_token_verifies_to_same_identity(self) -> None:
        token = create_access_token(secret=SECRET, user_id="abc-123", role=Role.ADMIN)
        identity = decode_access_token(token=token, secret=SECRET)
        self.assertEqual(identity.id, "abc-123")
        self.assertEqual(identity.role, Role.ADMIN)

    def test_role_given_as_string(self) -> None:
        token = create_access_token(secret=SECRET, user_id="u1", role="user")
        self.assertEqual(decode_access_token(token=token, secret=SECRET).role, Role.USER)

    def test_no_expiry_by_default(self) -> None:
        token = create_access_token(secret=SECRET, user_id="u1", role=Role.USER)
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])
        self.assertNotIn("exp", payload)
        self.assertIn("iat", payload)

    def test_expiry_added_when_configured(self) -> None:
        token = create_access_token(
            secret=SECRET, user_id="u1", role=Role.USER, expire_minutes=5
        )
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])
        self.assertGreater(payload["exp"], payload["iat"])

    def test_expired_token_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(minutes=5)
        token = jwt.encode(
            {"id": "u1", "role": "user", "iat": past - timedelta(minutes=1), "exp": past},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token=token, secret=SECRET)

    def test_other_secret_rejected(self) -> None:
        token = create_access_token(secret="another-secret", user_id="u1", role=Role.USER)
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token=token, secret=SECRET)

    def test_missing_token_rejected(self) -> None:
        for token in (None, "", "   "):
            with self.subTest(token=token):
                with self.assertRaises(InvalidTokenError):
                    decode_access_token(token=token, secret=SECRET)

    def test_garbage_token_rejected(self) -> None:
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token="not.a.jwt", secret=SECRET)

    def test_payload_without_id_rejected(self) -> None:
        token = jwt.encode({"role": "admin"}, SECRET, algorithm="HS256")
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token=token, secret=SECRET)

    def test_payload_with_unknown_role_rejected(self) -> None:
        token = jwt.encode({"id": "u1", "role": "root"}, SECRET, algorithm="HS256")
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token=token, secret=SECRET)

    def test_empty_secret_refused_at_issue(self) -> None:
        with self.assertRaises(ValueError):
            create_access_token(secret="", user_id="u1", role=Role.USER)


if __name__ == "__main__":
    unittest.main()

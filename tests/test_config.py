"""Unit tests for gatehouse.core.config: required secret and value ranges."""

import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from gatehouse.core.config import Settings


def _settings(**env: str) -> Settings:
    """Build Settings from exactly the given environment, ignoring any .env file."""
    with patch.dict(os.environ, env, clear=True):
        return Settings(_env_file=None)


class TestJwtSecretRequired(unittest.TestCase):
    """A missing or blank JWT_SECRET fails at construction, i.e. at startup."""

    def test_missing_secret_fails(self) -> None:
        with self.assertRaises(ValidationError):
            _settings()

    def test_blank_secret_fails(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")

    def test_secret_present(self) -> None:
        s = _settings(JWT_SECRET="abc")
        self.assertEqual(s.JWT_SECRET.get_secret_value(), "abc")


class TestDefaults(unittest.TestCase):
    def test_defaults(self) -> None:
        s = _settings(JWT_SECRET="abc")
        self.assertIsNone(s.JWT_EXPIRE_MINUTES)
        self.assertEqual(s.LOGIN_FAILURE_STATUS, 200)
        self.assertEqual(s.BCRYPT_ROUNDS, 12)
        self.assertEqual(s.JWT_ALGORITHM, "HS256")
        self.assertEqual(s.API_V1_PREFIX, "/api/v1")


class TestValidation(unittest.TestCase):
    def test_login_failure_status_401_allowed(self) -> None:
        s = _settings(JWT_SECRET="abc", LOGIN_FAILURE_STATUS="401")
        self.assertEqual(s.LOGIN_FAILURE_STATUS, 401)

    def test_login_failure_status_other_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="abc", LOGIN_FAILURE_STATUS="403")

    def test_database_url_scheme(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="abc", DATABASE_URL="mysql://localhost/db")
        s = _settings(JWT_SECRET="abc", DATABASE_URL="sqlite://")
        self.assertEqual(s.DATABASE_URL, "sqlite://")

    def test_expire_minutes_range(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="abc", JWT_EXPIRE_MINUTES="0")
        s = _settings(JWT_SECRET="abc", JWT_EXPIRE_MINUTES="30")
        self.assertEqual(s.JWT_EXPIRE_MINUTES, 30)

    def test_bcrypt_rounds_range(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="abc", BCRYPT_ROUNDS="3")

    def test_log_level_normalized(self) -> None:
        s = _settings(JWT_SECRET="abc", LOG_LEVEL="debug")
        self.assertEqual(s.LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="abc", LOG_LEVEL="loud")


if __name__ == "__main__":
    unittest.main()

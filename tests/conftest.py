"""Test environment: must be set before gatehouse.core.config is imported."""

import os

os.environ["JWT_SECRET"] = "test-secret-do-not-use"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("LOG_LEVEL", "WARNING")

"""
Test settings for LicenseBindingService.
"""

import os
import urllib.parse

from .base import *  # noqa: F403, F401

DEBUG = False

ALLOWED_HOSTS = ["*"]

# Use PostgreSQL in CI (from DATABASE_URL), file-backed SQLite for local tests
DATABASE_URL = os.environ.get("DATABASE_URL")
if DATABASE_URL and DATABASE_URL.startswith("postgresql"):
    parsed = urllib.parse.urlparse(DATABASE_URL)
    db_name = parsed.path[1:] if parsed.path.startswith("/") else parsed.path
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": db_name,
            "USER": parsed.username or "postgres",
            "PASSWORD": parsed.password or "",
            "HOST": parsed.hostname or "localhost",
            "PORT": parsed.port or 5432,
            "TEST": {
                "NAME": db_name + "_test",
            },
        }
    }
else:
    # File-backed so that threads in transactional tests share one database.
    # IMMEDIATE transactions take the write lock up front and wait on contention.
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "test_db.sqlite3",  # noqa: F405
            "OPTIONS": {
                "transaction_mode": "IMMEDIATE",
                "timeout": 20,
            },
            "TEST": {
                "NAME": str(BASE_DIR / "test_db.sqlite3"),  # noqa: F405
            },
        }
    }

# Password hashers for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

ACTIVATION_STORE_TIMEOUT_SECONDS = 2.0
AUDIT_STORE_TIMEOUT_SECONDS = 2.0

OTEL_ENABLED = False

# Disable logging during tests
LOGGING_CONFIG = None

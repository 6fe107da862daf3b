"""Settings for the test suite."""

import os

os.environ.setdefault("DJANGO_SECRET_KEY", "insecure-test-only-key")
os.environ.setdefault("DATABASE_NAME", ":memory:")

from config.settings import *  # noqa: E402,F401,F403

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
SESSION_COOKIE_SECURE = False
LOG_LEVEL = "WARNING"
LOGGING["root"]["level"] = LOG_LEVEL  # noqa: F405
LOGGING["loggers"]["theater"]["level"] = LOG_LEVEL  # noqa: F405

# File-backed so concurrent connections in transactional tests share one
# database and its locks.
if DATABASES["default"]["ENGINE"] == "django.db.backends.sqlite3":  # noqa: F405
    DATABASES["default"]["TEST"] = {  # noqa: F405
        "NAME": os.getenv("TEST_DATABASE_NAME", str(BASE_DIR / "test_theater.sqlite3")),  # noqa: F405
    }

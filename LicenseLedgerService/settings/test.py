"""
Test settings for LicenseLedgerService.
"""

import os
import tempfile

from .base import *  # noqa: F403, F401

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost"]

# File-backed SQLite with the production transaction mode, so tests that
# write from several threads share one database.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.path.join(tempfile.gettempdir(), "license-ledger.sqlite3"),
        "OPTIONS": {
            "transaction_mode": "IMMEDIATE",
            "timeout": 20,
        },
        "TEST": {
            "NAME": os.path.join(tempfile.gettempdir(), "license-ledger-test.sqlite3"),
        },
    }
}

LICENSE_SIGNING_SECRET = "test-signing-secret"
LICENSE_DEPLOYMENT_ID = "test-deployment"
OTEL_ENABLED = False

# Password hashers for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Disable logging during tests
LOGGING_CONFIG = None

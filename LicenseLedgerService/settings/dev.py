"""
Development settings for LicenseLedgerService.
"""

from .base import *  # noqa: F403, F401

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

# Placeholder secret for local development only. Keys issued with it are
# worthless outside this machine.
if not LICENSE_SIGNING_SECRET:  # noqa: F405
    LICENSE_SIGNING_SECRET = "dev-only-signing-secret"

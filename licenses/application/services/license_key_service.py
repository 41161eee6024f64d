"""
License key service.

Builds the signer and verifier from Django settings so the secret is read in
one place.
"""
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from licenses.domain.services import LicenseKeyVerifier
from licenses.domain.signer import KeySigner


def get_key_signer() -> KeySigner:
    """Return a signer for the configured ``LICENSE_SIGNING_SECRET``."""
    secret = getattr(settings, "LICENSE_SIGNING_SECRET", "")
    if not secret:
        raise ImproperlyConfigured("LICENSE_SIGNING_SECRET is not set")
    return KeySigner(secret.encode("utf-8"))


def get_key_verifier() -> LicenseKeyVerifier:
    """Return a verifier for the configured ``LICENSE_SIGNING_SECRET``."""
    return LicenseKeyVerifier(get_key_signer())

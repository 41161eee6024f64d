"""
Pytest configuration and shared fixtures.
"""

from datetime import date

import pytest

from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from licenses.domain.license_key import issue_license_key
from licenses.domain.services import LicenseKeyVerifier
from licenses.domain.signer import KeySigner

TEST_SECRET = b"test-signing-secret"


@pytest.fixture
def signer():
    """Fixture for a KeySigner holding the test settings' secret."""
    return KeySigner(TEST_SECRET)


@pytest.fixture
def verifier(signer):
    """Fixture for LicenseKeyVerifier."""
    return LicenseKeyVerifier(signer)


@pytest.fixture
def issue_key(signer):
    """Fixture returning a factory for signed license keys."""

    def _issue(max_cores=8, license_id=1, issued_on=date(2024, 1, 15)):
        return issue_license_key(
            signer, max_cores=max_cores, license_id=license_id, issued_on=issued_on
        )

    return _issue


@pytest.fixture
def activation_repository():
    """Fixture for ActivationRepository."""
    return DjangoActivationRepository()


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()

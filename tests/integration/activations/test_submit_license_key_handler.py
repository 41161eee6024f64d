"""
Integration tests for the activation ledger handlers.
"""

from datetime import datetime, timezone

import pytest

from activations.application.commands.submit_license_key import SubmitLicenseKeyCommand
from activations.application.dto.activation_dto import ActivationFound, ActivationNotFound
from activations.application.handlers.get_activation_status_handler import (
    GetActivationStatusHandler,
)
from activations.application.handlers.submit_license_key_handler import SubmitLicenseKeyHandler
from activations.application.queries.get_activation_status import GetActivationStatusQuery
from activations.infrastructure.models import ActivationRecord as ActivationRecordModel
from core.domain.exceptions import InvalidLicenseKeyError
from licenses.domain.license_key import hash_license_key

DEPLOYMENT = "test-deployment"
NOW = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def handler(activation_repository, verifier):
    return SubmitLicenseKeyHandler(
        activation_repository=activation_repository,
        verifier=verifier,
        clock=lambda: NOW,
    )


def submit(key):
    return SubmitLicenseKeyCommand(license_key=key, deployment_id=DEPLOYMENT)


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
class TestSubmitLicenseKeyHandler:
    """Integration tests for SubmitLicenseKeyHandler."""

    @pytest.mark.asyncio
    async def test_first_submission_creates_record(self, handler, issue_key):
        """Test the first key starts a one-year record."""
        result = await handler.handle(submit(issue_key()))

        assert result.years == 1
        assert result.activation_date == NOW
        assert result.already_active is False

    @pytest.mark.asyncio
    async def test_same_key_twice_is_idempotent(self, handler, issue_key):
        """Test resubmitting a key leaves years unchanged."""
        key = issue_key()
        first = await handler.handle(submit(key))
        second = await handler.handle(submit(key.lower().replace("-", "")))

        assert first.years == second.years == 1
        assert second.already_active is True

    @pytest.mark.asyncio
    async def test_distinct_keys_add_one_year_each(self, handler, issue_key):
        """Test each distinct key adds exactly one year."""
        years = []
        for license_id in (1, 2, 3):
            result = await handler.handle(submit(issue_key(license_id=license_id)))
            years.append(result.years)

        assert years == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_invalid_key_rejected(self, handler):
        """Test the ledger re-verifies keys itself."""
        with pytest.raises(InvalidLicenseKeyError):
            await handler.handle(submit("AAAAA-BBBBB-CCCCC-DDDDD-EEEEE"))

        status = await GetActivationStatusHandler(handler.activation_repository).handle(
            GetActivationStatusQuery(deployment_id=DEPLOYMENT)
        )
        assert isinstance(status, ActivationNotFound)

    @pytest.mark.asyncio
    async def test_only_hash_is_stored(self, handler, issue_key):
        """Test the plaintext key never reaches the store."""
        key = issue_key()
        await handler.handle(submit(key))

        model = await ActivationRecordModel.objects.aget(deployment_id=DEPLOYMENT)
        assert model.hashes == [hash_license_key(key)]
        assert key.replace("-", "") not in str(model.hashes)


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
class TestGetActivationStatusHandler:
    """Integration tests for GetActivationStatusHandler."""

    @pytest.mark.asyncio
    async def test_not_found(self, activation_repository):
        """Test no record is a tagged result, not an error."""
        status = await GetActivationStatusHandler(activation_repository).handle(
            GetActivationStatusQuery(deployment_id=DEPLOYMENT)
        )
        assert isinstance(status, ActivationNotFound)

    @pytest.mark.asyncio
    async def test_found(self, handler, activation_repository, issue_key):
        """Test status after a submission."""
        await handler.handle(submit(issue_key()))
        status = await GetActivationStatusHandler(activation_repository).handle(
            GetActivationStatusQuery(deployment_id=DEPLOYMENT)
        )

        assert isinstance(status, ActivationFound)
        assert status.record.years == 1
        assert status.record.activation_date == NOW

"""
Unit tests for LicenseValidator.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from client.ledger_client import FailureCategory, LedgerClientError, ServerRecord
from client.validator import (
    CPU_FALLBACK_WARNING,
    CpuReading,
    LicenseInfo,
    LicenseValidator,
    ValidationState,
)
from licenses.domain.license_key import MAX_CORES, normalize_license_key

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)
ACTIVATED = datetime(2024, 1, 15, tzinfo=timezone.utc)


@pytest.fixture
def ledger():
    ledger = MagicMock()
    ledger.activate.return_value = ServerRecord(activation_date=ACTIVATED, years=2)
    ledger.status.return_value = ServerRecord(activation_date=ACTIVATED, years=2)
    ledger.cpu_cores.return_value = 8
    return ledger


@pytest.fixture
def validator(verifier, ledger):
    return LicenseValidator(
        verifier=verifier,
        ledger_client=ledger,
        cpu_probe=lambda: {"cores": 4, "cpu_model": None},
        clock=lambda: NOW,
    )


class TestValidateLicenseKey:
    """Tests for the key validation path."""

    def test_valid_key(self, validator, ledger, issue_key):
        """Test a valid key on a machine within its core limit."""
        key = issue_key(max_cores=8, license_id=3)
        info = validator.validate_license_key(key, CpuReading(cores=8))

        ledger.activate.assert_called_once_with(normalize_license_key(key))
        assert validator.state is ValidationState.RESOLVED
        assert info.is_valid is True
        assert info.is_pro is True
        assert info.max_cores == 8
        assert info.actual_cores == 8
        assert info.license_id == "003"
        assert info.activation_date == ACTIVATED
        assert info.expiration_date == datetime(2026, 1, 15, tzinfo=timezone.utc)
        assert info.is_expired is False
        assert info.days_remaining == 228
        assert info.error is None

    def test_too_many_cores(self, validator, issue_key):
        """Test core-count enforcement."""
        info = validator.validate_license_key(issue_key(max_cores=8), CpuReading(cores=16))

        assert info.is_valid is False
        assert info.is_pro is False
        assert info.error == "License allows 8 cores, machine has 16"

    def test_expired(self, validator, ledger, issue_key):
        """Test an expired activation record."""
        ledger.activate.return_value = ServerRecord(activation_date=ACTIVATED, years=1)
        info = validator.validate_license_key(issue_key(), CpuReading(cores=2))

        assert info.is_valid is False
        assert info.is_expired is True
        assert info.days_remaining == 0
        assert info.error == "License expired on 2025-01-15"

    def test_malformed_key_never_reaches_ledger(self, validator, ledger):
        """Test local failures short-circuit."""
        info = validator.validate_license_key("AAAAA-BBBBB-CCCCC-DDDDD-EEEEE", CpuReading(cores=2))

        ledger.activate.assert_not_called()
        assert info == LicenseInfo(actual_cores=2, error=info.error)
        assert info.error in {
            "Invalid license key format",
            "License key is invalid or corrupted",
            "License key is not authentic",
        }
        assert validator.state is ValidationState.RESOLVED

    def test_malformed_key_without_cpu_makes_no_ledger_calls(self, validator, ledger):
        """Test local failures use local CPU detection instead of asking the ledger for cores."""
        info = validator.validate_license_key("AAAAA-BBBBB-CCCCC-DDDDD-EEEEE")

        assert ledger.method_calls == []
        assert info.is_valid is False
        assert info.max_cores == 0
        assert info.actual_cores == 4
        assert info.warning is None

    def test_cpu_fetched_from_ledger_after_local_check(self, validator, ledger, issue_key):
        """Test the ledger is asked for cores only once the key passed locally."""
        validator.validate_license_key(issue_key(max_cores=8))

        assert [c[0] for c in ledger.method_calls] == ["cpu_cores", "activate"]

    def test_wrong_length_message(self, validator):
        """Test length failure message."""
        info = validator.validate_license_key("ABC", CpuReading(cores=2))
        assert info.error == "License key must be exactly 25 characters"
        assert info.max_cores == 0

    @pytest.mark.parametrize(
        "category,message",
        [
            (FailureCategory.BAD_REQUEST, "License key rejected by license server"),
            (FailureCategory.NOT_FOUND, "License server not found"),
            (FailureCategory.SERVER_ERROR, "License server error - please try again"),
            (FailureCategory.UNREACHABLE, "Cannot connect to license server"),
            (FailureCategory.MALFORMED_RESPONSE, "License activation failed"),
        ],
    )
    def test_server_failure_keeps_local_max_cores(
        self, validator, ledger, issue_key, category, message
    ):
        """Test ledger failures resolve invalid but informative."""
        ledger.activate.side_effect = LedgerClientError(category, "failed")
        info = validator.validate_license_key(issue_key(max_cores=12), CpuReading(cores=2))

        assert info.is_valid is False
        assert info.max_cores == 12
        assert info.error == message
        assert info.activation_date is None

    def test_already_active_is_reported(self, validator, ledger, issue_key):
        """Test the ledger's already-active flag is carried through."""
        ledger.activate.return_value = ServerRecord(
            activation_date=ACTIVATED, years=2, already_active=True
        )
        info = validator.validate_license_key(issue_key(), CpuReading(cores=2))
        assert info.already_active is True
        assert info.is_valid is True


class TestCheckServerLicenseStatus:
    """Tests for the keyless status path."""

    def test_record_uses_deployment_ceiling(self, validator):
        """Test status path uses the deployment-wide core ceiling."""
        info = validator.check_server_license_status(CpuReading(cores=128))

        assert info.is_valid is True
        assert info.max_cores == MAX_CORES
        assert info.license_id is None
        assert info.expiration_date == datetime(2026, 1, 15, tzinfo=timezone.utc)

    def test_no_record(self, validator, ledger):
        """Test missing record resolves invalid without an error."""
        ledger.status.return_value = None
        info = validator.check_server_license_status(CpuReading(cores=4, warning="w"))

        assert info == LicenseInfo(actual_cores=4, warning="w")

    def test_ledger_failure(self, validator, ledger):
        """Test ledger errors never produce a valid result."""
        ledger.status.side_effect = LedgerClientError(FailureCategory.UNREACHABLE, "down")
        info = validator.check_server_license_status(CpuReading(cores=4))

        assert info.is_valid is False
        assert info.max_cores == 0


class TestGetCpuCores:
    """Tests for CPU detection."""

    def test_prefers_ledger(self, validator):
        """Test the ledger's count is used when available."""
        assert validator.get_cpu_cores() == CpuReading(cores=8)

    def test_falls_back_to_local_detection(self, validator, ledger):
        """Test local detection fallback sets a warning."""
        ledger.cpu_cores.side_effect = LedgerClientError(FailureCategory.UNREACHABLE, "down")
        assert validator.get_cpu_cores() == CpuReading(cores=4, warning=CPU_FALLBACK_WARNING)

    def test_cpu_detected_when_not_given(self, validator, ledger, issue_key):
        """Test validation reads the CPU itself."""
        info = validator.validate_license_key(issue_key(max_cores=8))
        ledger.cpu_cores.assert_called_once()
        assert info.actual_cores == 8

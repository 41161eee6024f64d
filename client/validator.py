"""
Client-side license validation.

A validation attempt moves through ``ValidationState``:

    IDLE -> LOCALLY_CHECKED -> SERVER_SUBMITTED -> RESOLVED

and always ends in a single ``LicenseInfo``. Expected failures (bad key,
unreachable server, expired license, too many cores) are reported through
``LicenseInfo.error``; nothing here raises for them.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from activations.domain.services import LicenseTerm
from client.config import ClientConfig
from client.ledger_client import FailureCategory, LedgerClient, LedgerClientError, ServerRecord
from core.domain.exceptions import InvalidLicenseKeyError
from core.system_info import detect_cpu
from licenses.domain.license_key import MAX_CORES
from licenses.domain.services import LicenseKeyVerifier
from licenses.domain.signer import KeySigner

logger = logging.getLogger(__name__)

LOCAL_FAILURE_MESSAGES = {
    "length": "License key must be exactly 25 characters",
    "format": "Invalid license key format",
    "checksum": "License key is invalid or corrupted",
    "signature": "License key is not authentic",
}

SERVER_FAILURE_MESSAGES = {
    FailureCategory.BAD_REQUEST: "License key rejected by license server",
    FailureCategory.NOT_FOUND: "License server not found",
    FailureCategory.SERVER_ERROR: "License server error - please try again",
    FailureCategory.UNREACHABLE: "Cannot connect to license server",
}
DEFAULT_SERVER_FAILURE = "License activation failed"

CPU_FALLBACK_WARNING = "Could not read CPU cores from license server; using local detection"


class ValidationState(Enum):
    """Stages of a single validation attempt."""

    IDLE = "idle"
    LOCALLY_CHECKED = "locally_checked"
    SERVER_SUBMITTED = "server_submitted"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class CpuReading:
    """Core count used for enforcement, with a warning if it came from the fallback."""

    cores: int
    warning: Optional[str] = None


@dataclass(frozen=True)
class LicenseInfo:
    """Outcome of a validation attempt."""

    is_valid: bool = False
    is_pro: bool = False
    max_cores: int = 0
    actual_cores: int = 0
    license_id: Optional[str] = None
    activation_date: Optional[datetime] = None
    expiration_date: Optional[datetime] = None
    days_remaining: Optional[int] = None
    is_expired: Optional[bool] = None
    error: Optional[str] = None
    warning: Optional[str] = None
    already_active: bool = False


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LicenseValidator:
    """
    Orchestrates local verification, ledger activation and entitlement checks.

    Attempts are strictly sequential: each issues at most one ledger call at a
    time and there is no built-in retry.
    """

    def __init__(
        self,
        verifier: LicenseKeyVerifier,
        ledger_client: LedgerClient,
        cpu_probe: Callable = detect_cpu,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize validator.

        Args:
            verifier: Local key verifier holding the shared secret
            ledger_client: Client for the activation ledger
            cpu_probe: Local CPU probe used when the ledger cannot report cores
            clock: Returns the current UTC time
        """
        self.verifier = verifier
        self.ledger_client = ledger_client
        self.cpu_probe = cpu_probe
        self.clock = clock
        self.state = ValidationState.IDLE

    @classmethod
    def from_config(cls, config: ClientConfig) -> "LicenseValidator":
        """Build a validator wired to the configured ledger and secret."""
        signer = KeySigner(config.signing_secret)
        return cls(
            verifier=LicenseKeyVerifier(signer),
            ledger_client=LedgerClient(config.server_url, config.timeout_seconds),
        )

    def get_cpu_cores(self) -> CpuReading:
        """
        Return the core count to enforce against.

        The ledger host is asked first; the local probe is the fallback and
        sets a warning.
        """
        try:
            return CpuReading(cores=self.ledger_client.cpu_cores())
        except LedgerClientError as e:
            logger.info("CPU probe via license server failed (%s); using local probe", e.category.value)
        return CpuReading(cores=self.cpu_probe()["cores"], warning=CPU_FALLBACK_WARNING)

    def validate_license_key(self, key: str, cpu: Optional[CpuReading] = None) -> LicenseInfo:
        """
        Validate a key locally, activate it with the ledger and evaluate it.

        Args:
            key: License key as entered
            cpu: Pre-fetched CPU reading, probed when omitted

        Returns:
            LicenseInfo
        """
        self.state = ValidationState.IDLE

        try:
            verified = self.verifier.verify(key)
        except InvalidLicenseKeyError as e:
            self.state = ValidationState.RESOLVED
            # Local failures never contact the ledger, not even for the core count.
            cpu = cpu or CpuReading(cores=self.cpu_probe()["cores"])
            return LicenseInfo(
                actual_cores=cpu.cores,
                error=LOCAL_FAILURE_MESSAGES.get(e.reason, "Invalid license key"),
                warning=cpu.warning,
            )
        self.state = ValidationState.LOCALLY_CHECKED
        entitlement = verified.entitlement
        cpu = cpu or self.get_cpu_cores()

        try:
            self.state = ValidationState.SERVER_SUBMITTED
            record = self.ledger_client.activate(verified.normalized_key)
        except LedgerClientError as e:
            self.state = ValidationState.RESOLVED
            return LicenseInfo(
                max_cores=entitlement.max_cores,
                actual_cores=cpu.cores,
                error=SERVER_FAILURE_MESSAGES.get(e.category, DEFAULT_SERVER_FAILURE),
                warning=cpu.warning,
            )

        self.state = ValidationState.RESOLVED
        return self._resolve(
            record,
            max_cores=entitlement.max_cores,
            cpu=cpu,
            license_id=entitlement.license_id,
        )

    def check_server_license_status(self, cpu: Optional[CpuReading] = None) -> LicenseInfo:
        """
        Evaluate the ledger's current record without a key.

        The deployment-wide ceiling of 65536 cores replaces the per-key limit
        on this path.

        Args:
            cpu: Pre-fetched CPU reading, probed when omitted

        Returns:
            LicenseInfo; invalid with ``max_cores=0`` when there is no record
        """
        cpu = cpu or self.get_cpu_cores()
        try:
            record = self.ledger_client.status()
        except LedgerClientError as e:
            logger.warning("License status check failed: %s", e.category.value)
            record = None

        if record is None:
            return LicenseInfo(actual_cores=cpu.cores, warning=cpu.warning)
        return self._resolve(record, max_cores=MAX_CORES, cpu=cpu)

    def _resolve(
        self,
        record: ServerRecord,
        max_cores: int,
        cpu: CpuReading,
        license_id: Optional[str] = None,
    ) -> LicenseInfo:
        now = self.clock()
        term = LicenseTerm(activation_date=record.activation_date, years=record.years)
        expiry = term.expires_at
        expired = term.is_expired(now)
        cores_ok = cpu.cores <= max_cores
        valid = not expired and cores_ok

        error = None
        if not cores_ok:
            error = f"License allows {max_cores} cores, machine has {cpu.cores}"
        elif expired:
            error = f"License expired on {expiry.date().isoformat()}"

        return LicenseInfo(
            is_valid=valid,
            is_pro=valid,
            max_cores=max_cores,
            actual_cores=cpu.cores,
            license_id=license_id,
            activation_date=record.activation_date,
            expiration_date=expiry,
            days_remaining=term.days_remaining(now),
            is_expired=expired,
            error=error,
            warning=cpu.warning,
            already_active=record.already_active,
        )

"""
License session for the desktop client.

Holds the current ``LicenseInfo`` and the persisted key, and exposes the
actions the settings page drives.
"""

import logging
from dataclasses import replace
from typing import Optional

from client.config import ClientConfig
from client.key_store import KeyStore
from client.validator import LicenseInfo, LicenseValidator
from licenses.domain.license_key import KEY_LENGTH, clean_license_key

logger = logging.getLogger(__name__)

KEY_SHAPE_ERROR = "Key must be 25 alphanumeric characters"
ALREADY_ACTIVE_MESSAGE = "This license key is already active. Enter a different key to extend."


class LicenseSession:
    """Client-side license state backed by a ``KeyStore``."""

    def __init__(self, validator: LicenseValidator, store: KeyStore):
        self.validator = validator
        self.store = store
        self.license_key: Optional[str] = store.load()
        self.license_info = LicenseInfo()
        self.is_initialized = False

    @classmethod
    def from_config(cls, config: ClientConfig) -> "LicenseSession":
        """Build a session from client configuration."""
        return cls(LicenseValidator.from_config(config), KeyStore(config.key_store_path))

    def initialize(self) -> LicenseInfo:
        """
        Probe the CPU once and restore state from the ledger's record.

        Returns:
            LicenseInfo reflecting the deployment-wide activation state
        """
        cpu = self.validator.get_cpu_cores()
        status = self.validator.check_server_license_status(cpu)
        self.license_info = replace(
            status,
            actual_cores=cpu.cores,
            warning=cpu.warning or status.warning,
        )
        self.is_initialized = True
        return self.license_info

    def set_license_key(self, raw_key: str) -> LicenseInfo:
        """
        Validate and, if valid, persist a new key.

        Args:
            raw_key: Key as entered, any separators and case

        Returns:
            Updated LicenseInfo
        """
        clean = clean_license_key(raw_key)
        if len(clean) != KEY_LENGTH:
            self.license_info = replace(self.license_info, is_valid=False, error=KEY_SHAPE_ERROR)
            return self.license_info

        if self.license_key == clean:
            self.license_info = replace(
                self.license_info, is_valid=False, error=ALREADY_ACTIVE_MESSAGE
            )
            return self.license_info

        info = self.validator.validate_license_key(clean)
        if info.already_active:
            info = replace(info, warning=ALREADY_ACTIVE_MESSAGE)

        with self.store.open_session() as stored:
            stored.license_key = clean if info.is_valid else None
        self.license_key = clean if info.is_valid else None
        self.license_info = info
        return info

    def clear_license(self) -> None:
        """Forget the stored key, keeping the known core count."""
        with self.store.open_session() as stored:
            stored.license_key = None
        self.license_key = None
        self.license_info = LicenseInfo(actual_cores=self.license_info.actual_cores)

    def validate_current_license(self) -> LicenseInfo:
        """
        Re-validate the stored key.

        Without a stored key, state restored from the ledger is kept when it is
        valid and reset otherwise.
        """
        if not self.license_key:
            current = self.license_info
            if not current.is_valid:
                self.license_info = LicenseInfo(
                    actual_cores=current.actual_cores, warning=current.warning
                )
            return self.license_info

        self.license_info = self.validator.validate_license_key(self.license_key)
        return self.license_info

    def is_pro_version(self) -> bool:
        """True when the current license is valid, pro and not expired."""
        info = self.license_info
        return info.is_valid and info.is_pro and not info.is_expired

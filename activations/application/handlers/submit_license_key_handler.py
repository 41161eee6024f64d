"""
SubmitLicenseKeyHandler.

Handler for crediting a license key to the activation ledger.
"""

import logging
from typing import Callable, Optional

from django.utils import timezone

from activations.application.commands.submit_license_key import SubmitLicenseKeyCommand
from activations.application.dto.activation_dto import SubmitLicenseKeyResponseDTO
from activations.domain.activation import SubmissionOutcome
from activations.domain.events import ActivationExtended, LicenseKeyActivated
from activations.ports.activation_repository import ActivationRepository
from core.crypto import CryptoProvider, default_crypto
from core.domain.exceptions import InvalidLicenseKeyError
from core.infrastructure.events import event_bus
from core.metrics import license_key_rejections_total, license_key_submissions_total
from licenses.domain.license_key import hash_license_key
from licenses.domain.services import LicenseKeyVerifier

logger = logging.getLogger(__name__)

HASH_PREFIX_LENGTH = 12


class SubmitLicenseKeyHandler:
    """Handler for SubmitLicenseKeyCommand."""

    def __init__(
        self,
        activation_repository: ActivationRepository,
        verifier: LicenseKeyVerifier,
        crypto: CryptoProvider = default_crypto,
        clock: Optional[Callable] = None,
    ):
        """Initialize handler with repository and key verifier."""
        self.activation_repository = activation_repository
        self.verifier = verifier
        self.crypto = crypto
        self.clock = clock or timezone.now

    async def handle(self, command: SubmitLicenseKeyCommand) -> SubmitLicenseKeyResponseDTO:
        """
        Handle submit license key command.

        The key is re-verified here regardless of any client-side check; only
        its SHA-256 digest reaches the repository.

        Args:
            command: SubmitLicenseKeyCommand

        Returns:
            SubmitLicenseKeyResponseDTO with the record's activation date and years

        Raises:
            InvalidLicenseKeyError: If the key fails verification
        """
        try:
            verified = self.verifier.verify(command.license_key)
        except InvalidLicenseKeyError as e:
            license_key_rejections_total.labels(reason=e.reason).inc()
            logger.info("Rejected license key submission: %s", e.code)
            raise

        key_hash = hash_license_key(verified.normalized_key, crypto=self.crypto)
        hash_prefix = key_hash[:HASH_PREFIX_LENGTH]

        record, outcome = await self.activation_repository.record_key_hash(
            command.deployment_id, key_hash, self.clock()
        )
        license_key_submissions_total.labels(outcome=outcome.value).inc()
        logger.info(
            "License key %s for deployment %s: %s (years=%d)",
            hash_prefix,
            command.deployment_id,
            outcome.value,
            record.years,
        )

        if outcome is SubmissionOutcome.CREATED:
            await event_bus.publish(
                LicenseKeyActivated(
                    deployment_id=command.deployment_id,
                    key_hash_prefix=hash_prefix,
                    years=record.years,
                )
            )
        elif outcome is SubmissionOutcome.EXTENDED:
            await event_bus.publish(
                ActivationExtended(
                    deployment_id=command.deployment_id,
                    key_hash_prefix=hash_prefix,
                    years=record.years,
                )
            )

        return SubmitLicenseKeyResponseDTO(
            activation_date=record.activation_date,
            years=record.years,
            already_active=outcome is SubmissionOutcome.ALREADY_RECORDED,
        )

"""
Activation repository port (interface).

This defines the contract for activation record persistence.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Tuple

from activations.domain.activation import ActivationRecord, SubmissionOutcome


class ActivationRepository(ABC):
    """
    Abstract repository for ActivationRecord entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def find_by_deployment(self, deployment_id: str) -> Optional[ActivationRecord]:
        """
        Find the activation record of a deployment.

        Args:
            deployment_id: Deployment identifier

        Returns:
            ActivationRecord or None if no key was ever submitted
        """
        pass

    @abstractmethod
    async def record_key_hash(
        self, deployment_id: str, key_hash: str, now: datetime
    ) -> Tuple[ActivationRecord, SubmissionOutcome]:
        """
        Credit a key hash to a deployment as one atomic read-modify-write.

        Creates the record when none exists. Concurrent calls for the same
        deployment must be serialized by the implementation so no credit is
        lost.

        Args:
            deployment_id: Deployment identifier
            key_hash: SHA-256 hex digest of the normalized key
            now: Timestamp used if the record is created

        Returns:
            Tuple of (persisted record, outcome)
        """
        pass

"""
Activation domain events.

Domain events represent something that happened in the activation domain.
"""
import uuid
from datetime import datetime, timezone
from typing import Optional

from core.domain.events import DomainEvent


class LicenseKeyActivated(DomainEvent):
    """Event raised when the first key for a deployment creates its record."""

    def __init__(
        self,
        deployment_id: str,
        key_hash_prefix: str,
        years: int,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseKeyActivated event.

        Args:
            deployment_id: Deployment identifier
            key_hash_prefix: Leading characters of the key hash (never the key)
            years: Years credited after the submission
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=deployment_id,
            event_type="LicenseKeyActivated",
        )
        self.deployment_id = deployment_id
        self.key_hash_prefix = key_hash_prefix
        self.years = years


class ActivationExtended(DomainEvent):
    """Event raised when a new distinct key adds a year to a record."""

    def __init__(
        self,
        deployment_id: str,
        key_hash_prefix: str,
        years: int,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize ActivationExtended event.

        Args:
            deployment_id: Deployment identifier
            key_hash_prefix: Leading characters of the key hash (never the key)
            years: Years credited after the submission
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at or datetime.now(timezone.utc),
            aggregate_id=deployment_id,
            event_type="ActivationExtended",
        )
        self.deployment_id = deployment_id
        self.key_hash_prefix = key_hash_prefix
        self.years = years

"""
ActivationRecord domain entity.

This is the core domain entity of the activation ledger: one record per
deployment, accumulating a year of validity for every distinct key credited.
It contains business logic and is independent of infrastructure.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import FrozenSet, Tuple


class SubmissionOutcome(Enum):
    """What a key submission did to the record."""

    CREATED = "created"
    EXTENDED = "extended"
    ALREADY_RECORDED = "already_recorded"


@dataclass(frozen=True)
class ActivationRecord:
    """
    ActivationRecord domain entity.

    Invariants: ``years == len(key_hashes)``, ``years`` never decreases and
    ``activation_date`` is fixed at the first submission.
    """

    deployment_id: str
    activation_date: datetime
    years: int
    key_hashes: FrozenSet[str]

    def __post_init__(self):
        """Validate activation record."""
        if not self.deployment_id:
            raise ValueError("Deployment identifier is required")
        if self.years < 1:
            raise ValueError("Activation record must carry at least one year")
        if not self.key_hashes:
            raise ValueError("Activation record must carry at least one key hash")
        if self.years != len(self.key_hashes):
            raise ValueError("Years must equal the number of credited key hashes")

    @classmethod
    def start(cls, deployment_id: str, key_hash: str, now: datetime) -> "ActivationRecord":
        """
        Create the record for a deployment's first accepted key.

        Args:
            deployment_id: Deployment identifier
            key_hash: SHA-256 hex digest of the normalized key
            now: Activation timestamp

        Returns:
            ActivationRecord with one year credited
        """
        return cls(
            deployment_id=deployment_id,
            activation_date=now,
            years=1,
            key_hashes=frozenset({key_hash}),
        )

    def has_key(self, key_hash: str) -> bool:
        """Check whether a key hash was already credited."""
        return key_hash in self.key_hashes

    def credit(self, key_hash: str) -> Tuple["ActivationRecord", SubmissionOutcome]:
        """
        Credit a key to this record.

        Resubmitting a recorded hash returns the record unchanged.

        Args:
            key_hash: SHA-256 hex digest of the normalized key

        Returns:
            Tuple of (record, outcome)
        """
        if self.has_key(key_hash):
            return self, SubmissionOutcome.ALREADY_RECORDED
        return (
            replace(self, years=self.years + 1, key_hashes=self.key_hashes | {key_hash}),
            SubmissionOutcome.EXTENDED,
        )

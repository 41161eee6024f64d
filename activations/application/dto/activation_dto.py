"""
Activation DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Union


@dataclass
class ActivationRecordDTO:
    """DTO for the accumulated activation state of a deployment."""

    activation_date: datetime
    years: int


@dataclass
class SubmitLicenseKeyResponseDTO(ActivationRecordDTO):
    """DTO for a key submission; ``already_active`` when the key was credited before."""

    already_active: bool = False


@dataclass
class ActivationFound:
    """Status result when the deployment has a record."""

    record: ActivationRecordDTO


@dataclass
class ActivationNotFound:
    """Status result when no key was ever submitted for the deployment."""


ActivationStatus = Union[ActivationFound, ActivationNotFound]

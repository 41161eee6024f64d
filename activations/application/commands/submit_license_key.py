"""
SubmitLicenseKeyCommand.

Command to credit a license key to a deployment's activation record.
"""

from dataclasses import dataclass


@dataclass
class SubmitLicenseKeyCommand:
    """Command to submit a license key for a deployment."""

    license_key: str
    deployment_id: str

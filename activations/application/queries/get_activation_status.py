"""
GetActivationStatusQuery.

Query to read the activation record of a deployment.
"""
from dataclasses import dataclass


@dataclass
class GetActivationStatusQuery:
    """Query to get activation status."""

    deployment_id: str

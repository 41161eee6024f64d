"""
GetActivationStatusHandler.

Handler for reading a deployment's activation record.
"""

from activations.application.dto.activation_dto import (
    ActivationFound,
    ActivationNotFound,
    ActivationRecordDTO,
    ActivationStatus,
)
from activations.application.queries.get_activation_status import GetActivationStatusQuery
from activations.ports.activation_repository import ActivationRepository


class GetActivationStatusHandler:
    """Handler for GetActivationStatusQuery."""

    def __init__(self, activation_repository: ActivationRepository):
        """Initialize handler with repository."""
        self.activation_repository = activation_repository

    async def handle(self, query: GetActivationStatusQuery) -> ActivationStatus:
        """
        Handle get activation status query.

        Args:
            query: GetActivationStatusQuery

        Returns:
            ActivationFound with the record, or ActivationNotFound
        """
        record = await self.activation_repository.find_by_deployment(query.deployment_id)
        if record is None:
            return ActivationNotFound()
        return ActivationFound(
            record=ActivationRecordDTO(activation_date=record.activation_date, years=record.years)
        )

"""
Django implementation of ActivationRepository port.

This adapter converts between domain entities and Django ORM models and
performs the ledger's read-modify-write inside one database transaction.
"""

from datetime import datetime
from typing import Optional, Tuple

from asgiref.sync import sync_to_async
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from activations.domain.activation import ActivationRecord, SubmissionOutcome
from activations.infrastructure.models import ActivationRecord as ActivationRecordModel
from activations.ports.activation_repository import ActivationRepository


class DjangoActivationRepository(ActivationRepository):
    """
    Django ORM implementation of ActivationRepository.

    ``record_key_hash`` locks the deployment's row (``SELECT ... FOR UPDATE``
    on PostgreSQL, an IMMEDIATE transaction on SQLite) for the whole
    load-modify-store, so concurrent submissions are serialized by the
    database rather than by this process.
    """

    def _to_domain(self, model: ActivationRecordModel) -> ActivationRecord:
        """
        Convert Django model to domain entity.

        Args:
            model: Django ActivationRecord model

        Returns:
            ActivationRecord domain entity
        """
        return ActivationRecord(
            deployment_id=model.deployment_id,
            activation_date=model.activation_date,
            years=model.years,
            key_hashes=frozenset(model.hashes),
        )

    def _apply(self, model: ActivationRecordModel, record: ActivationRecord) -> None:
        """Copy domain state onto a model instance."""
        model.activation_date = record.activation_date
        model.years = record.years
        model.hashes = sorted(record.key_hashes)

    def _locked(self, deployment_id: str) -> Optional[ActivationRecordModel]:
        # pylint: disable=no-member
        return (
            ActivationRecordModel.objects.select_for_update()
            .filter(deployment_id=deployment_id)
            .first()
        )

    def _record_key_hash(
        self, deployment_id: str, key_hash: str, now: datetime
    ) -> Tuple[ActivationRecord, SubmissionOutcome]:
        with transaction.atomic():
            model = self._locked(deployment_id)
            if model is None:
                record = ActivationRecord.start(deployment_id, key_hash, now)
                try:
                    with transaction.atomic():
                        model = ActivationRecordModel(deployment_id=deployment_id)
                        self._apply(model, record)
                        model.save()
                    return self._to_domain(model), SubmissionOutcome.CREATED
                except (IntegrityError, ValidationError):
                    # Another writer created the record first; credit against theirs.
                    model = self._locked(deployment_id)

            record, outcome = self._to_domain(model).credit(key_hash)
            if outcome is SubmissionOutcome.EXTENDED:
                self._apply(model, record)
                model.save()
            return record, outcome

    async def record_key_hash(
        self, deployment_id: str, key_hash: str, now: datetime
    ) -> Tuple[ActivationRecord, SubmissionOutcome]:
        """
        Credit a key hash to a deployment as one atomic read-modify-write.

        Args:
            deployment_id: Deployment identifier
            key_hash: SHA-256 hex digest of the normalized key
            now: Timestamp used if the record is created

        Returns:
            Tuple of (persisted record, outcome)
        """
        return await sync_to_async(self._record_key_hash)(deployment_id, key_hash, now)

    async def find_by_deployment(self, deployment_id: str) -> Optional[ActivationRecord]:
        """
        Find the activation record of a deployment.

        Args:
            deployment_id: Deployment identifier

        Returns:
            ActivationRecord or None if not found
        """
        try:
            # pylint: disable=no-member
            model = await sync_to_async(ActivationRecordModel.objects.get)(
                deployment_id=deployment_id
            )
            return self._to_domain(model)
        except ActivationRecordModel.DoesNotExist:  # pylint: disable=no-member
            return None

"""
Event handlers for domain events.

These handlers process ledger events for side effects: audit logging and
Prometheus gauges.
"""

import logging

from activations.domain.events import ActivationExtended, LicenseKeyActivated
from core.domain.events import DomainEvent, EventHandler
from core.infrastructure.events import event_bus
from core.metrics import activation_years

logger = logging.getLogger(__name__)


class AuditLogEventHandler(EventHandler):
    """Logs every ledger event with its envelope."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": event.aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
                "key_hash_prefix": getattr(event, "key_hash_prefix", None),
                "years": getattr(event, "years", None),
            },
        )


class ActivationMetricsEventHandler(EventHandler):
    """Keeps the ``activation_years`` gauge in step with the ledger."""

    async def handle(self, event: DomainEvent) -> None:
        years = getattr(event, "years", None)
        if years is not None:
            activation_years.labels(deployment_id=event.aggregate_id).set(years)


def register_event_handlers() -> None:
    """Subscribe the ledger event handlers to the global event bus."""
    audit_handler = AuditLogEventHandler()
    metrics_handler = ActivationMetricsEventHandler()

    for event_type in (LicenseKeyActivated, ActivationExtended):
        event_bus.subscribe(event_type, audit_handler)
        event_bus.subscribe(event_type, metrics_handler)

    logger.info("Event handlers registered")

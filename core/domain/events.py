"""
Ledger event envelope and dispatch contracts.

The activation ledger raises ``LicenseKeyActivated`` when a deployment's first
key creates its record and ``ActivationExtended`` when another distinct key
adds a year. Payloads carry a short hash prefix at most; a plaintext key never
appears in an event.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict
from uuid import UUID


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Envelope shared by every ledger event.

    ``aggregate_id`` is the deployment identifier whose record changed.
    Concrete events set the envelope via ``super().__init__`` and add their
    payload as plain attributes.
    """

    event_id: UUID
    occurred_at: datetime
    aggregate_id: str
    event_type: str

    def to_dict(self) -> Dict[str, Any]:
        """Envelope as JSON-ready values, used by the audit log."""
        return dict(
            event_id=str(self.event_id),
            event_type=self.event_type,
            aggregate_id=self.aggregate_id,
            occurred_at=self.occurred_at.isoformat(),
        )


class EventHandler(ABC):
    """Reacts to a committed ledger change, e.g. audit logging or gauges."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """Process one event after the record change has been stored."""


class EventBus(ABC):
    """Routes ledger events to the handlers registered for their class."""

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """Deliver ``event`` to its handlers; handler failures stay inside the bus."""

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """Register ``handler`` for events of exactly ``event_type``."""

"""
Process-local event bus for the activation ledger.

The ledger runs as one instance, so events never leave the process. The audit
and activation-gauge handlers are registered once at app startup.
"""

import asyncio
import logging
from typing import Dict, List, Type

from core.domain.events import DomainEvent, EventBus, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    Dispatches ledger events to in-process handlers.

    A record change is already committed when its event is published, so a
    handler failure is logged and never reaches the submitting request.
    """

    def __init__(self):
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """Register ``handler``; a second handler of the same class is ignored."""
        registered = self._handlers.setdefault(event_type, [])
        if type(handler) in {type(h) for h in registered}:
            return
        registered.append(handler)
        logger.debug("%s listening for %s", type(handler).__name__, event_type.__name__)

    def clear(self) -> None:
        """Forget all handlers. Used between tests."""
        self._handlers.clear()

    async def publish(self, event: DomainEvent) -> None:
        """Run every handler for ``event`` concurrently and wait for all of them."""
        handlers = self._handlers.get(type(event))
        if not handlers:
            logger.debug("%s has no listeners", event.event_type)
            return

        logger.info(
            "Dispatching %s for deployment %s", event.event_type, event.aggregate_id,
            extra={"handler_count": len(handlers)},
        )
        await asyncio.gather(*(self._deliver(handler, event) for handler in handlers))

    async def _deliver(self, handler: EventHandler, event: DomainEvent) -> None:
        name = type(handler).__name__
        try:
            await handler.handle(event)
        except Exception:
            logger.exception("%s failed on %s", name, event.event_type)
            return
        logger.debug("%s handled %s", name, event.event_type)


event_bus = InMemoryEventBus()

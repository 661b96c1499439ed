"""In-process domain events for the modular monolith.

Events describe facts that are already durable, so producers publish them
with ``publish_on_commit``: handlers run only once the surrounding
transaction has committed, and never for a rolled-back one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import partial
from typing import Dict, Generic, List, Protocol, Type, TypeVar
from uuid import UUID, uuid4

import structlog
from django.db import transaction

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DomainEvent:
    """Base domain event (immutable)."""

    aggregate_id: int
    event_id: UUID = field(default_factory=uuid4)
    occurred_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    event_name: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "event_name", self.__class__.__name__)


E = TypeVar("E", bound=DomainEvent, contravariant=True)


class IEventHandler(Protocol, Generic[E]):
    """Handler interface for domain events."""

    def handle(self, event: E) -> None: ...


class InMemoryEventBus:
    """Synchronous in-process event bus keyed by event class."""

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[IEventHandler]] = {}

    def subscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        handlers = self._handlers.setdefault(event_class, [])
        if handler not in handlers:
            handlers.append(handler)

    def publish(self, event: DomainEvent) -> None:
        handlers = self._handlers.get(type(event), [])
        logger.info(
            "event.published",
            event_name=event.event_name,
            aggregate_id=event.aggregate_id,
            handler_count=len(handlers),
        )
        for handler in handlers:
            handler.handle(event)

    def publish_on_commit(self, event: DomainEvent, using: str = "default") -> None:
        """Publish *event* after the current transaction on *using* commits.

        Outside a transaction the event is published immediately.  A failing
        handler is logged by Django and does not affect the committed data.
        """
        transaction.on_commit(partial(self.publish, event), using=using, robust=True)


# Global bus instance (singleton)

event_bus = InMemoryEventBus()

"""Domain events for the Orders bounded context.

``OrderPlaced`` is the hand-off point to the downstream payment step: it
carries identifiers only, never request payloads.
"""

from __future__ import annotations

from dataclasses import dataclass

from shared.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class OrderPlaced(DomainEvent):
    """Raised after an order and its stock adjustments are committed."""

    buyer_id: int


@dataclass(frozen=True)
class OrderPaid(DomainEvent):
    """Raised after an order is confirmed as paid."""

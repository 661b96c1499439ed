"""Event handlers for Orders domain events."""

from __future__ import annotations

import structlog

from modules.orders.events import OrderPaid, OrderPlaced
from shared.events import IEventHandler

logger = structlog.get_logger(__name__)


class OrderPlacedHandler(IEventHandler[OrderPlaced]):
    def handle(self, event: OrderPlaced) -> None:
        logger.info(
            "order.event.placed",
            order_id=event.aggregate_id,
            buyer_id=event.buyer_id,
            event_id=str(event.event_id),
        )


class OrderPaidHandler(IEventHandler[OrderPaid]):
    def handle(self, event: OrderPaid) -> None:
        logger.info(
            "order.event.paid",
            order_id=event.aggregate_id,
            event_id=str(event.event_id),
        )


order_placed_handler = OrderPlacedHandler()
order_paid_handler = OrderPaidHandler()

"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.  Write methods
run inside the transaction opened by the order writer; the repository
never commits on its own.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.utils import timezone

from modules.orders.constants import PAYABLE_STATES, OrderStatus
from modules.orders.dtos import PlaceOrderDTO, PlaceOrderItemDTO
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

# Column set of the header/item join consumed by the read model.
ORDER_ROW_FIELDS = (
    "id",
    "buyer_id",
    "buyer__username",
    "total_amount",
    "shipping_fee",
    "shipping_address",
    "status",
    "created_at",
    "items__id",
    "items__product_id",
    "items__product_name",
    "items__quantity",
    "items__price",
    "items__subtotal",
)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    def __init__(self, using: str = "default") -> None:
        self._using = using

    # ------------------------------------------------------------------
    # Writes (inside the placement transaction)
    # ------------------------------------------------------------------

    def create_header(self, request: PlaceOrderDTO) -> Order:
        order = Order(
            buyer_id=request.buyer_id,
            total_amount=request.total_amount,
            shipping_fee=request.shipping_fee,
            shipping_address=request.shipping_address,
            status=OrderStatus.PENDING,
        )
        order.save(using=self._using)
        logger.info("order.header_inserted", order_id=order.pk)
        return order

    def add_item(self, order: Order, item: PlaceOrderItemDTO) -> OrderItem:
        line = OrderItem(
            order=order,
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=item.quantity,
            price=item.price,
            subtotal=item.subtotal,
        )
        line.save(using=self._using)
        return line

    # ------------------------------------------------------------------
    # Read model source
    # ------------------------------------------------------------------

    def fetch_rows(self, buyer_id: Optional[int] = None) -> List[Dict[str, Any]]:
        """Flat ``orders LEFT JOIN order_items`` rows.

        ``values()`` across the reverse ``items`` relation produces a LEFT
        OUTER JOIN, so orders without items still yield a row.
        """
        queryset = Order.objects.using(self._using).all()
        if buyer_id is not None:
            queryset = queryset.filter(buyer_id=buyer_id)
        return list(
            queryset.order_by("-created_at", "-id", "items__id").values(
                *ORDER_ROW_FIELDS
            )
        )

    # ------------------------------------------------------------------
    # Payment confirmation
    # ------------------------------------------------------------------

    def mark_paid(self, order_id: int) -> bool:
        updated = (
            Order.objects.using(self._using)
            .filter(pk=order_id, status__in=PAYABLE_STATES)
            .update(status=OrderStatus.PAID, updated_at=timezone.now())
        )
        if updated:
            logger.info("order.marked_paid", order_id=order_id)
        return bool(updated)

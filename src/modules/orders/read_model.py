"""Order read model.

Rebuilds denormalized order aggregates from the flat joined row stream
returned by the repository.  The fold keeps encounter order: orders stay
most-recent first and items stay in insertion order.  An order whose join
produced no item columns still surfaces, with an empty item list.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

import structlog
from django.db import DatabaseError

from modules.orders.dtos import OrderAggregateDTO, OrderLineItemDTO
from modules.orders.exceptions import ReadModelError

if TYPE_CHECKING:
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderReadModel:
    def __init__(self, order_repository: IOrderRepository) -> None:
        self._order_repo = order_repository

    def list_orders(self) -> List[OrderAggregateDTO]:
        return fold_order_rows(self._fetch(), include_buyer_name=True)

    def list_orders_for_buyer(self, buyer_id: int) -> List[OrderAggregateDTO]:
        return fold_order_rows(self._fetch(buyer_id), include_buyer_name=False)

    def _fetch(self, buyer_id: Optional[int] = None) -> List[Dict[str, Any]]:
        try:
            return self._order_repo.fetch_rows(buyer_id)
        except DatabaseError as exc:
            logger.error("order.read_failed", buyer_id=buyer_id)
            raise ReadModelError(str(exc)) from exc


def fold_order_rows(
    rows: Iterable[Dict[str, Any]], include_buyer_name: bool = True
) -> List[OrderAggregateDTO]:
    """Collapse joined header/item rows into one aggregate per order id."""
    headers: Dict[int, Dict[str, Any]] = {}
    items: Dict[int, List[OrderLineItemDTO]] = {}

    for row in rows:
        order_id = row["id"]
        if order_id not in headers:
            headers[order_id] = {
                "id": order_id,
                "buyer_id": row["buyer_id"],
                "buyer_name": row.get("buyer__username") if include_buyer_name else None,
                "total_amount": row["total_amount"],
                "shipping_fee": row["shipping_fee"],
                "shipping_address": row["shipping_address"],
                "status": row["status"],
                "created_at": row["created_at"],
            }
            items[order_id] = []

        if row["items__id"] is not None:
            items[order_id].append(
                OrderLineItemDTO(
                    id=row["items__id"],
                    product_id=row["items__product_id"],
                    product_name=row["items__product_name"],
                    quantity=row["items__quantity"],
                    price=row["items__price"],
                    subtotal=row["items__subtotal"],
                )
            )

    return [
        OrderAggregateDTO(**header, items=items[order_id])
        for order_id, header in headers.items()
    ]

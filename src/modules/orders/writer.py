"""Transactional order writer.

Persists a reconciled order request as one atomic unit:

1. insert the order header (status ``pending``);
2. per line item, insert the snapshotted ``OrderItem``;
3. per line item, apply ``stock = stock - q, sales = sales + q`` guarded by
   ``stock >= q``.

Any failure (constraint violation, lost connection, a guarded decrement
refused because concurrent orders drained the stock) rolls the whole unit
back and surfaces as ``OrderWriteFailed``.  There is no retry: the caller
must submit a fresh request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.db import transaction

from modules.orders.exceptions import OrderWriteFailed, StockConflict

if TYPE_CHECKING:
    from modules.orders.config import OrderingConfig
    from modules.orders.dtos import PlaceOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class TransactionalOrderWriter:
    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        config: OrderingConfig,
    ) -> None:
        self._order_repo = order_repository
        self._product_repo = product_repository
        self._config = config

    def write(self, request: PlaceOrderDTO) -> Order:
        """Write header, items and stock adjustments, all or nothing.

        Returns the committed order header.

        Raises:
            OrderWriteFailed: the transaction was rolled back; ``cause``
                holds the underlying exception, a
                ``StockConflict`` for a refused decrement.
        """
        log = logger.bind(buyer_id=request.buyer_id, item_count=len(request.items))
        try:
            with transaction.atomic(using=self._config.database_alias):
                order = self._order_repo.create_header(request)
                for item in request.items:
                    self._order_repo.add_item(order, item)
                    if not self._product_repo.apply_sale(item.product_id, item.quantity):
                        raise StockConflict(
                            item.product_id, item.product_name, item.quantity
                        )
        except Exception as exc:
            log.error(
                "order.write_rolled_back",
                cause=type(exc).__name__,
                detail=str(exc),
            )
            raise OrderWriteFailed(exc) from exc

        log.info("order.write_committed", order_id=order.pk)
        return order

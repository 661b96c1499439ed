"""Order service layer (Use Cases).

Orchestrates a placement attempt through its states:

    Validating -> Reconciling -> {Rejected | Writing} -> {Committed | RolledBack}

1. Validate the request shape and its money arithmetic (no storage access).
2. Check the buyer exists (read-only, outside any transaction).
3. Reconcile stock for every item; reject with the full list of offending
   items if any is missing or short.
4. Write header, items and stock adjustments in one transaction.

Every outcome is terminal for the attempt; nothing is retried here.
Stock correctness under concurrency is delegated to the storage layer:
no in-process state is shared between attempts.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any, List

import structlog

from modules.buyers.services import BuyerExistenceChecker
from modules.orders.constants import PlacementState
from modules.orders.events import OrderPaid, OrderPlaced
from modules.orders.exceptions import (
    OrderNotFound,
    OrderWriteFailed,
    StockRejected,
)
from modules.orders.read_model import OrderReadModel
from modules.orders.reconciliation import StockReconciliationEngine
from modules.orders.validation import validate_order_request
from modules.orders.writer import TransactionalOrderWriter
from shared.events import event_bus

if TYPE_CHECKING:
    from modules.buyers.repositories.interfaces import IBuyerRepository
    from modules.orders.config import OrderingConfig
    from modules.orders.dtos import OrderAggregateDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories and the ordering configuration via constructor
    injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        buyer_repository: IBuyerRepository,
        product_repository: IProductRepository,
        config: OrderingConfig,
    ) -> None:
        self._config = config
        self._order_repo = order_repository
        self._buyers = BuyerExistenceChecker(buyer_repository)
        self._reconciler = StockReconciliationEngine(product_repository, config)
        self._writer = TransactionalOrderWriter(
            order_repository, product_repository, config
        )
        self._read_model = OrderReadModel(order_repository)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def place_order(self, payload: Any) -> Order:
        """Place an order from a raw request payload.

        Raises:
            OrderValidationError: malformed request.
            BuyerNotFound: unknown ``userId``.
            StockLookupFailed: stock could not be read.
            StockRejected: some items are missing or short on stock.
            OrderWriteFailed: the write transaction rolled back.
        """
        log = logger.bind(attempt_id=str(uuid.uuid4()))

        log.info("order.validating", state=PlacementState.VALIDATING.value)
        request = validate_order_request(payload, self._config.total_tolerance)
        log = log.bind(buyer_id=request.buyer_id)

        self._buyers.ensure_exists(request.buyer_id)

        log.info(
            "order.reconciling",
            state=PlacementState.RECONCILING.value,
            item_count=len(request.items),
        )
        verdicts = self._reconciler.reconcile(request.items)
        offending = self._reconciler.offending(verdicts)
        if offending:
            log.warning(
                "order.rejected",
                state=PlacementState.REJECTED.value,
                product_ids=[verdict.product_id for verdict in offending],
            )
            raise StockRejected(offending)

        log.info("order.writing", state=PlacementState.WRITING.value)
        try:
            order = self._writer.write(request)
        except OrderWriteFailed:
            log.error("order.rolled_back", state=PlacementState.ROLLED_BACK.value)
            raise

        log.info(
            "order.committed",
            state=PlacementState.COMMITTED.value,
            order_id=order.pk,
        )
        event_bus.publish_on_commit(
            OrderPlaced(aggregate_id=order.pk, buyer_id=request.buyer_id),
            using=self._config.database_alias,
        )
        return order

    def mark_order_paid(self, order_id: int) -> None:
        """Record the external payment confirmation.

        Status transition only: stock is not re-validated.

        Raises:
            OrderNotFound: the order does not exist.
        """
        if not self._order_repo.mark_paid(order_id):
            raise OrderNotFound(f"Order {order_id} not found.")
        event_bus.publish_on_commit(
            OrderPaid(aggregate_id=order_id),
            using=self._config.database_alias,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_orders(self) -> List[OrderAggregateDTO]:
        """Every order with its items, most recent first."""
        return self._read_model.list_orders()

    def list_orders_for_buyer(self, buyer_id: int) -> List[OrderAggregateDTO]:
        """Orders of one buyer, most recent first.

        Raises:
            BuyerNotFound: unknown buyer.
            ReadModelError: orders could not be read.
        """
        self._buyers.ensure_exists(buyer_id)
        return self._read_model.list_orders_for_buyer(buyer_id)

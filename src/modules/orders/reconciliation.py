"""Stock reconciliation.

Produces a per-item sufficiency verdict for a validated order request.
One stock look-up is issued per product; when several products are
requested the look-ups are dispatched on a thread pool and all of them
complete before any verdict is produced.

The verdicts are advisory: they are read outside the write transaction
and may be stale by the time the order is written.  The order writer
re-validates every decrement atomically, so a stale ``sufficient`` can
never turn into oversold stock.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

import structlog
from django.db import DatabaseError, connections

from modules.orders.constants import StockVerdict
from modules.orders.dtos import ItemVerdictDTO
from modules.orders.exceptions import StockLookupFailed

if TYPE_CHECKING:
    from modules.orders.config import OrderingConfig
    from modules.orders.dtos import PlaceOrderItemDTO
    from modules.products.dtos import StockSnapshotDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class StockReconciliationEngine:
    def __init__(
        self,
        product_repository: IProductRepository,
        config: OrderingConfig,
    ) -> None:
        self._product_repo = product_repository
        self._config = config

    def reconcile(self, items: Sequence[PlaceOrderItemDTO]) -> List[ItemVerdictDTO]:
        """Return one verdict per item, in request order.

        Raises:
            StockLookupFailed: storage could not be queried.
        """
        product_ids = list(dict.fromkeys(item.product_id for item in items))
        try:
            snapshots = self._fetch_stock(product_ids)
        except DatabaseError as exc:
            logger.error("order.stock_lookup_failed", product_ids=product_ids)
            raise StockLookupFailed(str(exc)) from exc

        return [_verdict_for(item, snapshots[item.product_id]) for item in items]

    @staticmethod
    def offending(verdicts: Sequence[ItemVerdictDTO]) -> List[ItemVerdictDTO]:
        """Every ``not_found`` / ``insufficient`` verdict, in request order."""
        return [verdict for verdict in verdicts if not verdict.is_sufficient]

    # ------------------------------------------------------------------
    # Look-up dispatch
    # ------------------------------------------------------------------

    def _fetch_stock(
        self, product_ids: List[int]
    ) -> Dict[int, Optional[StockSnapshotDTO]]:
        if not self._can_dispatch_concurrently(product_ids):
            return {pid: self._product_repo.get_stock(pid) for pid in product_ids}

        workers = min(self._config.stock_lookup_workers, len(product_ids))
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="stock-lookup"
        ) as pool:
            futures = {pid: pool.submit(self._lookup_in_worker, pid) for pid in product_ids}
            return {pid: future.result() for pid, future in futures.items()}

    def _can_dispatch_concurrently(self, product_ids: List[int]) -> bool:
        # Worker threads get their own connections and cannot see rows the
        # caller has not committed yet.
        if connections[self._config.database_alias].in_atomic_block:
            return False
        return self._config.stock_lookup_workers > 1 and len(product_ids) > 1

    def _lookup_in_worker(self, product_id: int) -> Optional[StockSnapshotDTO]:
        try:
            return self._product_repo.get_stock(product_id)
        finally:
            connections.close_all()


def _verdict_for(
    item: PlaceOrderItemDTO, snapshot: Optional[StockSnapshotDTO]
) -> ItemVerdictDTO:
    if snapshot is None:
        return ItemVerdictDTO(
            product_id=item.product_id,
            product_name=item.product_name,
            verdict=StockVerdict.NOT_FOUND,
            requested_quantity=item.quantity,
        )
    verdict = (
        StockVerdict.SUFFICIENT
        if snapshot.stock >= item.quantity
        else StockVerdict.INSUFFICIENT
    )
    return ItemVerdictDTO(
        product_id=item.product_id,
        product_name=snapshot.title,
        verdict=verdict,
        requested_quantity=item.quantity,
        available_stock=snapshot.stock,
    )

"""Product repository interface.

The order placement flow needs two things from the catalog: an advisory
stock reading, and an atomic relative stock/sales adjustment that refuses
to drive stock below zero.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from modules.products.dtos import StockSnapshotDTO


class IProductRepository(ABC):
    """Repository contract for product inventory."""

    @abstractmethod
    def get_stock(self, product_id: int) -> Optional[StockSnapshotDTO]:
        """Return the current stock reading, or ``None`` if the product is unknown."""

    @abstractmethod
    def apply_sale(self, product_id: int, quantity: int) -> bool:
        """Decrement stock and increment sales by *quantity* in one statement.

        Returns ``False`` (and changes nothing) when the product is missing
        or holds less than *quantity* units at write time.
        """

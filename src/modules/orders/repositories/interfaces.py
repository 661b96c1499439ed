"""Order repository interface.

Covers the three data paths of the Order aggregate: the writes performed
inside the placement transaction, the flat joined rows the read model
folds into aggregates, and the payment status transition.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from modules.orders.dtos import PlaceOrderDTO, PlaceOrderItemDTO
    from modules.orders.models import Order, OrderItem


class IOrderRepository(ABC):
    """Repository contract for the Order aggregate root.

    ``create_header`` and ``add_item`` are only meaningful inside the
    caller's transaction; they do not open one themselves.
    """

    @abstractmethod
    def create_header(self, request: PlaceOrderDTO) -> Order:
        """Insert the order header with status ``pending``."""

    @abstractmethod
    def add_item(self, order: Order, item: PlaceOrderItemDTO) -> OrderItem:
        """Insert one line item snapshotted from the request."""

    @abstractmethod
    def fetch_rows(self, buyer_id: Optional[int] = None) -> List[Dict[str, Any]]:
        """Return order headers left-joined with their items.

        Rows are ordered most-recent order first, items in insertion order.
        An order without items yields one row whose item columns are ``None``.
        """

    @abstractmethod
    def mark_paid(self, order_id: int) -> bool:
        """Set the order status to ``paid``; ``False`` if the order is unknown."""

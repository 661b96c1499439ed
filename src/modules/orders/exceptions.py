"""Order domain exceptions.

Raised by the Service Layer and its collaborators.  Every exception is
terminal for the current placement attempt and carries enough structure
for the caller to act on it (which field, which products, available vs.
requested quantities).  The API layer (Views) translates them into HTTP
responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from modules.orders.dtos import ItemVerdictDTO


class OrderValidationError(Exception):
    """The order request is malformed.  No side effect occurred."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class StockRejected(Exception):
    """One or more requested items cannot be satisfied.

    ``items`` lists every offending item, not only the first.  Raised
    before any transaction is opened.
    """

    def __init__(self, items: List[ItemVerdictDTO]) -> None:
        super().__init__(f"Insufficient stock for {len(items)} item(s).")
        self.items = items


class StockLookupFailed(Exception):
    """The advisory stock look-up could not reach storage."""


class StockConflict(Exception):
    """A relative stock decrement was refused at write time.

    Happens when a concurrent order consumed the stock after the advisory
    reconciliation passed.  Raised inside the write transaction so that it
    rolls back.
    """

    def __init__(self, product_id: int, product_name: str, quantity: int) -> None:
        super().__init__(
            f"Product {product_id}: stock changed, {quantity} unit(s) no longer available."
        )
        self.product_id = product_id
        self.product_name = product_name
        self.quantity = quantity


class OrderWriteFailed(Exception):
    """The write transaction was opened and then rolled back.

    No order header, line item or stock adjustment from the attempt
    survives.  ``cause`` is the underlying exception.
    """

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Order write rolled back: {cause}")
        self.cause = cause

    @property
    def conflict(self) -> Optional[StockConflict]:
        return self.cause if isinstance(self.cause, StockConflict) else None


class ReadModelError(Exception):
    """Order history could not be read.  Nothing was mutated."""


class OrderNotFound(Exception):
    """The requested order does not exist."""

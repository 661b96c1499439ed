"""Order domain constants.

Defines the order status choices, the reconciliation verdicts and the
states a single placement attempt moves through.
"""

from enum import Enum

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"


# States from which the external payment confirmation may mark an order paid.
PAYABLE_STATES: set[str] = {OrderStatus.PENDING, OrderStatus.PAID}


class StockVerdict(str, Enum):
    SUFFICIENT = "sufficient"
    NOT_FOUND = "not_found"
    INSUFFICIENT = "insufficient"


class PlacementState(str, Enum):
    """Validating -> Reconciling -> {Rejected | Writing} -> {Committed | RolledBack}."""

    VALIDATING = "validating"
    RECONCILING = "reconciling"
    REJECTED = "rejected"
    WRITING = "writing"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


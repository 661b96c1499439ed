"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  DTOs are
immutable (``frozen=True``) and use the camelCase wire names of the public
API (``userId``, ``orderItems``, ``shippingFee`` ...); Python code uses the
snake_case attribute names.

- ``PlaceOrderItemDTO`` / ``PlaceOrderDTO``: structural shape of an order
  request.  Cross-field rules live in ``modules.orders.validation``.
- ``ItemVerdictDTO``: per-item outcome of stock reconciliation.
- ``OrderHeaderDTO``: persisted order header returned by placement.
- ``OrderLineItemDTO`` / ``OrderAggregateDTO``: read-model aggregates.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator
from pydantic.alias_generators import to_camel

from modules.orders.constants import StockVerdict

if TYPE_CHECKING:
    from modules.orders.models import Order


_WIRE_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


def _reject_bool(v: Any) -> Any:
    # JSON true/false would otherwise coerce to 1/0.
    if isinstance(v, bool):
        raise ValueError("Input should be a number, not a boolean.")
    return v


class PlaceOrderItemDTO(BaseModel):
    """A requested line item.

    ``product_name``, ``price`` and ``subtotal`` are snapshotted into the
    order as sent; they are never re-read from the catalog.
    """

    model_config = ConfigDict(**_WIRE_CONFIG, str_strip_whitespace=True)

    product_id: PositiveInt
    product_name: str = Field(min_length=1)
    quantity: int
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    subtotal: Decimal = Field(ge=0, max_digits=12, decimal_places=2)

    @field_validator("product_id", "quantity", mode="before")
    @classmethod
    def numbers_must_not_be_booleans(cls, v: Any) -> Any:
        return _reject_bool(v)

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class PlaceOrderDTO(BaseModel):
    """Structurally valid order request."""

    model_config = ConfigDict(**_WIRE_CONFIG, str_strip_whitespace=True)

    buyer_id: PositiveInt = Field(alias="userId")
    total_amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    shipping_fee: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    shipping_address: str = Field(min_length=1)
    items: List[PlaceOrderItemDTO] = Field(alias="orderItems", min_length=1)

    @field_validator("buyer_id", mode="before")
    @classmethod
    def buyer_id_must_not_be_boolean(cls, v: Any) -> Any:
        return _reject_bool(v)

    @property
    def product_ids(self) -> List[int]:
        return [item.product_id for item in self.items]


# ---------------------------------------------------------------------------
# Reconciliation
# ---------------------------------------------------------------------------


class ItemVerdictDTO(BaseModel):
    """Stock sufficiency verdict for one requested item."""

    model_config = _WIRE_CONFIG

    product_id: int
    product_name: str
    verdict: StockVerdict
    requested_quantity: int
    available_stock: Optional[int] = None

    @property
    def is_sufficient(self) -> bool:
        return self.verdict is StockVerdict.SUFFICIENT

    @property
    def error(self) -> Optional[str]:
        if self.verdict is StockVerdict.NOT_FOUND:
            return "Product not found"
        if self.verdict is StockVerdict.INSUFFICIENT:
            return (
                f"Insufficient stock. Available: {self.available_stock}, "
                f"Requested: {self.requested_quantity}"
            )
        return None

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        if self.error:
            payload["error"] = self.error
        return payload


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OrderHeaderDTO(BaseModel):
    """Immutable DTO for a persisted order header."""

    model_config = _WIRE_CONFIG

    id: int
    buyer_id: int = Field(alias="userId")
    total_amount: Decimal
    shipping_fee: Decimal
    shipping_address: str
    status: str = Field(alias="orderStatus")
    created_at: datetime

    @classmethod
    def from_entity(cls, order: Order) -> OrderHeaderDTO:
        return cls(
            id=order.pk,
            buyer_id=order.buyer_id,
            total_amount=order.total_amount,
            shipping_fee=order.shipping_fee,
            shipping_address=order.shipping_address,
            status=order.status,
            created_at=order.created_at,
        )


class OrderLineItemDTO(BaseModel):
    """Immutable DTO for a line item inside an order aggregate."""

    model_config = _WIRE_CONFIG

    id: int
    product_id: int
    product_name: str
    quantity: int
    price: Decimal
    subtotal: Decimal


class OrderAggregateDTO(OrderHeaderDTO):
    """Order header with its nested line items, in insertion order."""

    buyer_name: Optional[str] = None
    items: List[OrderLineItemDTO] = Field(default_factory=list, alias="orderItems")

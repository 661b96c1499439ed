"""Order request validation.

Runs before any storage access.  Structural checks (presence, types,
ranges) are delegated to ``PlaceOrderDTO``; the cross-field rules below
make the declared money amounts authoritative only when they agree with
the line items:

- a product may appear at most once per order;
- ``subtotal`` must equal ``price * quantity``;
- ``totalAmount`` must equal the sum of subtotals plus ``shippingFee``.

Monetary comparisons allow a configurable rounding tolerance.  The first
offending field is reported.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping

from pydantic import ValidationError

from modules.orders.dtos import PlaceOrderDTO
from modules.orders.exceptions import OrderValidationError


def validate_order_request(
    payload: Any, tolerance: Decimal = Decimal("0.01")
) -> PlaceOrderDTO:
    """Return a validated ``PlaceOrderDTO`` or raise ``OrderValidationError``."""
    if not isinstance(payload, Mapping):
        raise OrderValidationError("body", "Order request must be a JSON object.")

    try:
        dto = PlaceOrderDTO.model_validate(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "body"
        raise OrderValidationError(field, first["msg"]) from exc

    _check_distinct_products(dto)
    _check_subtotals(dto, tolerance)
    _check_total(dto, tolerance)
    return dto


def _check_distinct_products(dto: PlaceOrderDTO) -> None:
    if len(set(dto.product_ids)) != len(dto.product_ids):
        raise OrderValidationError(
            "orderItems", "Duplicate product IDs are not allowed in the same order."
        )


def _check_subtotals(dto: PlaceOrderDTO, tolerance: Decimal) -> None:
    for index, item in enumerate(dto.items):
        expected = item.price * item.quantity
        if abs(item.subtotal - expected) > tolerance:
            raise OrderValidationError(
                f"orderItems.{index}.subtotal",
                f"Subtotal {item.subtotal} does not match price x quantity ({expected}).",
            )


def _check_total(dto: PlaceOrderDTO, tolerance: Decimal) -> None:
    expected = sum((item.subtotal for item in dto.items), Decimal("0")) + dto.shipping_fee
    if abs(dto.total_amount - expected) > tolerance:
        raise OrderValidationError(
            "totalAmount",
            f"Total {dto.total_amount} does not match items plus shipping ({expected}).",
        )

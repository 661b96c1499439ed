"""Product model as seen by order placement.

Catalog management (titles, prices, images) belongs to another subsystem;
this module only guarantees the inventory invariants:

- ``stock`` is never negative (``CHECK`` constraint, storage-level backstop).
- ``sales`` is never negative and only ever grows through order placement.
- ``price`` is never negative.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class Product(BaseModel):
    """Sellable product with its inventory counters."""

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=100, blank=True, default="")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    stock = models.PositiveIntegerField(default=0)
    sales = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["title"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="products_stock_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(sales__gte=0),
                name="products_sales_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.title} (stock={self.stock})"

"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: ``get_stock`` returns
``None`` for an unknown product and ``apply_sale`` reports a refused
adjustment as ``False`` and the caller decides what that means.
"""

from __future__ import annotations

from typing import Optional

import structlog
from django.db.models import F
from django.utils import timezone

from modules.products.dtos import StockSnapshotDTO
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def __init__(self, using: str = "default") -> None:
        self._using = using

    def get_stock(self, product_id: int) -> Optional[StockSnapshotDTO]:
        row = (
            Product.objects.using(self._using)
            .filter(pk=product_id)
            .values("id", "title", "stock")
            .first()
        )
        if row is None:
            return None
        return StockSnapshotDTO(**row)

    def apply_sale(self, product_id: int, quantity: int) -> bool:
        """Relative update guarded by ``stock >= quantity``.

        Expressed as ``UPDATE ... SET stock = stock - q`` so concurrent
        writers serialize on the row lock instead of overwriting each
        other's in-memory values.  The ``WHERE`` guard is re-evaluated
        against the latest committed row once the lock is granted.
        """
        updated = (
            Product.objects.using(self._using)
            .filter(pk=product_id, stock__gte=quantity)
            .update(
                stock=F("stock") - quantity,
                sales=F("sales") + quantity,
                updated_at=timezone.now(),
            )
        )
        if updated:
            logger.info(
                "product.sale_applied",
                product_id=product_id,
                quantity=quantity,
            )
        else:
            logger.warning(
                "product.sale_refused",
                product_id=product_id,
                quantity=quantity,
            )
        return bool(updated)

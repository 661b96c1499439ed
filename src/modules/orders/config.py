"""Explicit configuration for the order placement components.

Built once from ``settings.ORDERING`` and handed to the reconciliation
engine and the order writer at construction time, so neither reads
process-wide settings on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from django.conf import settings


@dataclass(frozen=True)
class OrderingConfig:
    stock_lookup_workers: int = 4
    total_tolerance: Decimal = Decimal("0.01")
    database_alias: str = "default"

    def __post_init__(self) -> None:
        if self.stock_lookup_workers < 1:
            raise ValueError("stock_lookup_workers must be at least 1.")
        if self.total_tolerance < 0:
            raise ValueError("total_tolerance cannot be negative.")

    @classmethod
    def from_settings(cls, values: Optional[Mapping[str, Any]] = None) -> OrderingConfig:
        values = settings.ORDERING if values is None else values
        return cls(
            stock_lookup_workers=int(values.get("STOCK_LOOKUP_WORKERS", 4)),
            total_tolerance=Decimal(str(values.get("TOTAL_TOLERANCE", "0.01"))),
            database_alias=values.get("DATABASE_ALIAS", "default"),
        )

"""Product DTOs for the Service Layer.

- ``StockSnapshotDTO``: point-in-time stock reading used by order
  reconciliation.  It is advisory only; the authoritative check happens
  inside the write transaction.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StockSnapshotDTO(BaseModel):
    """Immutable stock reading for a single product."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    stock: int

"""Buyer repository interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class IBuyerRepository(ABC):
    """Read-only look-ups against the buyer identity store."""

    @abstractmethod
    def exists(self, buyer_id: int) -> bool:
        """Return ``True`` if a buyer with *buyer_id* exists."""

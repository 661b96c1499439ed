"""Buyer existence check.

A pure read executed before any transaction is opened.  A buyer deleted
between this check and the order write is not guarded against; the
``orders.user_id`` foreign key rejects the insert in that case.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from modules.buyers.exceptions import BuyerNotFound

if TYPE_CHECKING:
    from modules.buyers.repositories.interfaces import IBuyerRepository

logger = structlog.get_logger(__name__)


class BuyerExistenceChecker:
    def __init__(self, buyer_repository: IBuyerRepository) -> None:
        self._buyer_repo = buyer_repository

    def ensure_exists(self, buyer_id: int) -> None:
        """Raise ``BuyerNotFound`` unless *buyer_id* refers to a known buyer."""
        if not self._buyer_repo.exists(buyer_id):
            logger.warning("buyer.not_found", buyer_id=buyer_id)
            raise BuyerNotFound(buyer_id)

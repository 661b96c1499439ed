"""Buyer domain exceptions."""

from __future__ import annotations


class BuyerNotFound(Exception):
    """The buyer referenced by a request does not exist."""

    def __init__(self, buyer_id: int) -> None:
        super().__init__(f"Buyer {buyer_id} not found.")
        self.buyer_id = buyer_id

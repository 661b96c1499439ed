"""Buyer repositories package."""

from modules.buyers.repositories.django_repository import BuyerDjangoRepository
from modules.buyers.repositories.interfaces import IBuyerRepository

__all__ = ["BuyerDjangoRepository", "IBuyerRepository"]

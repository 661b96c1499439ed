"""Django ORM implementation of the Buyer repository."""

from __future__ import annotations

from django.contrib.auth import get_user_model

from modules.buyers.repositories.interfaces import IBuyerRepository


class BuyerDjangoRepository(IBuyerRepository):
    """Buyer look-ups backed by ``settings.AUTH_USER_MODEL``."""

    def __init__(self, using: str = "default") -> None:
        self._using = using

    def exists(self, buyer_id: int) -> bool:
        return (
            get_user_model()
            .objects.using(self._using)
            .filter(pk=buyer_id)
            .exists()
        )

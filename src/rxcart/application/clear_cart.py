"""Application service: Clear Cart use case."""

from __future__ import annotations

import structlog

from rxcart.domain.exceptions import EntityNotFoundError
from rxcart.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class ClearCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, cart_id: int) -> int:
        """Delete every line and reset the total; return how many lines went."""
        with self._uow:
            cart = self._uow.carts.get_by_id(cart_id)
            if cart is None:
                raise EntityNotFoundError(f"Cart #{cart_id} not found")

            removed = cart.clear()
            if removed:
                self._uow.carts.save(cart)
                self._uow.commit()

        logger.info("cart_cleared", cart_id=cart_id, removed=removed)
        return removed

"""Application service: Set Cart Line Quantity use case."""

from __future__ import annotations

import structlog

from rxcart.domain.exceptions import EntityNotFoundError
from rxcart.domain.model.cart import CartLine
from rxcart.domain.model.value_objects import Quantity
from rxcart.domain.repository.catalog_repository import CatalogPriceLookup
from rxcart.domain.repository.unit_of_work import UnitOfWork
from rxcart.domain.service.cart_pricing_service import CartPricingService

logger = structlog.get_logger(__name__)


class SetCartLineQuantityHandler:

    def __init__(self, uow: UnitOfWork, catalog: CatalogPriceLookup) -> None:
        self._uow = uow
        self._catalog = catalog

    def handle(
        self,
        cart_id: int,
        catalog_entry_id: int,
        quantity: int,
    ) -> tuple[int, list[CartLine]]:
        """Overwrite the quantity of an existing line.

        Returns ``(affected_count, updated_lines)``; the total is only
        recomputed when a line was actually updated.
        """
        qty = Quantity(quantity)

        with self._uow:
            cart = self._uow.carts.get_by_id(cart_id)
            if cart is None:
                raise EntityNotFoundError(f"Cart #{cart_id} not found")

            updated = cart.set_line_quantity(catalog_entry_id, qty)
            if updated:
                CartPricingService(self._catalog).recompute_total(cart)
                self._uow.carts.save(cart)
                self._uow.commit()

        logger.info(
            "cart_line_quantity_set",
            cart_id=cart_id,
            catalog_entry_id=catalog_entry_id,
            quantity=qty.value,
            affected=len(updated),
        )
        return len(updated), updated

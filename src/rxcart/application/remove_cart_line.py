"""Application service: Remove Cart Line use case."""

from __future__ import annotations

import structlog

from rxcart.domain.exceptions import EntityNotFoundError
from rxcart.domain.repository.catalog_repository import CatalogPriceLookup
from rxcart.domain.repository.unit_of_work import UnitOfWork
from rxcart.domain.service.cart_pricing_service import CartPricingService

logger = structlog.get_logger(__name__)


class RemoveCartLineHandler:

    def __init__(self, uow: UnitOfWork, catalog: CatalogPriceLookup) -> None:
        self._uow = uow
        self._catalog = catalog

    def handle(self, cart_id: int, catalog_entry_id: int) -> int:
        """Remove the line for a catalog entry.

        Returns 1 if a line was removed and 0 if the cart had no such line,
        so callers can tell "not found" from "removed".
        """
        with self._uow:
            cart = self._uow.carts.get_by_id(cart_id)
            if cart is None:
                raise EntityNotFoundError(f"Cart #{cart_id} not found")

            removed = cart.remove_line(catalog_entry_id)
            if removed:
                CartPricingService(self._catalog).recompute_total(cart)
                self._uow.carts.save(cart)
                self._uow.commit()

        logger.info(
            "cart_line_removed",
            cart_id=cart_id,
            catalog_entry_id=catalog_entry_id,
            removed=removed,
        )
        return removed

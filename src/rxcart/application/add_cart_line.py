"""Application service: Add Cart Line use case.

Looks up the catalog entry, lets the Cart aggregate enforce the
single-establishment and merge rules, then re-derives the total from
current prices, all inside one unit of work.
"""

from __future__ import annotations

import structlog

from rxcart.domain.exceptions import EntityNotFoundError
from rxcart.domain.model.cart import CartLine
from rxcart.domain.model.value_objects import Quantity
from rxcart.domain.repository.catalog_repository import CatalogPriceLookup
from rxcart.domain.repository.unit_of_work import UnitOfWork
from rxcart.domain.service.cart_pricing_service import CartPricingService

logger = structlog.get_logger(__name__)


class AddCartLineHandler:

    def __init__(self, uow: UnitOfWork, catalog: CatalogPriceLookup) -> None:
        self._uow = uow
        self._catalog = catalog

    def handle(self, cart_id: int, catalog_entry_id: int, quantity: int) -> CartLine:
        """Add *quantity* units of a catalog entry to the cart.

        Raises:
            ValidationError: quantity is not a positive integer.
            EntityNotFoundError: cart or catalog entry does not exist.
            ConflictError: the entry belongs to another establishment than
                the items already in the cart.
        """
        qty = Quantity(quantity)

        with self._uow:
            cart = self._uow.carts.get_by_id(cart_id)
            if cart is None:
                raise EntityNotFoundError(f"Cart #{cart_id} not found")

            price = self._catalog.get_unit_price_and_establishment(catalog_entry_id)
            line = cart.add_line(price, qty)

            CartPricingService(self._catalog).recompute_total(cart)
            self._uow.carts.save(cart)
            self._uow.commit()

        logger.info(
            "cart_line_added",
            cart_id=cart_id,
            catalog_entry_id=catalog_entry_id,
            quantity=line.quantity.value,
            cart_total=str(cart.total),
        )
        return line

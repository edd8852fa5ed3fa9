"""Application service: Show Cart use case (query).

Lines are priced at the current catalog price, the same way the stored
total is derived, so what the client sees matches what checkout charges.
"""

from __future__ import annotations

from rxcart.application.dto import CartDTO, CartLineDTO
from rxcart.application.get_or_create_cart import get_or_create_cart
from rxcart.domain.repository.catalog_repository import CatalogPriceLookup
from rxcart.domain.repository.unit_of_work import UnitOfWork
from rxcart.domain.service.cart_pricing_service import CartPricingService


class ShowCartHandler:

    def __init__(self, uow: UnitOfWork, catalog: CatalogPriceLookup) -> None:
        self._uow = uow
        self._catalog = catalog

    def handle(self, client_id: int) -> CartDTO:
        pricing = CartPricingService(self._catalog)

        with self._uow:
            cart = get_or_create_cart(self._uow, client_id)
            priced = pricing.price_lines(cart)
            self._uow.commit()

        return CartDTO(
            id=cart.id,
            client_id=cart.client_id,
            establishment_id=cart.establishment_id,
            items=[
                CartLineDTO(
                    catalog_entry_id=p.line.catalog_entry_id,
                    quantity=p.line.quantity.value,
                    unit_price=str(p.unit_price),
                    line_total=str(p.subtotal),
                )
                for p in priced
            ],
            total=str(pricing.subtotal(priced)),
        )

"""Domain service: Cart Pricing.

Prices cart lines at the *current* catalog price and re-derives the
cart's stored total from scratch.  The total is never patched
incrementally, so a catalog price change made since the last mutation
is always picked up.
"""

from __future__ import annotations

from dataclasses import dataclass

from rxcart.domain.exceptions import ConflictError
from rxcart.domain.model.cart import Cart, CartLine
from rxcart.domain.model.catalog import CatalogPrice
from rxcart.domain.model.value_objects import Money
from rxcart.domain.repository.catalog_repository import CatalogPriceLookup
from rxcart.domain.service.pricing import line_subtotal, rounded_sum


@dataclass(frozen=True)
class PricedLine:
    line: CartLine
    price: CatalogPrice

    @property
    def unit_price(self) -> Money:
        return self.price.unit_price

    @property
    def subtotal(self) -> Money:
        return line_subtotal(self.price.unit_price, self.line.quantity)


class CartPricingService:

    def __init__(self, catalog: CatalogPriceLookup) -> None:
        self._catalog = catalog

    def price_lines(self, cart: Cart) -> list[PricedLine]:
        """Look up the current price of every line in the cart."""
        return [
            PricedLine(
                line=line,
                price=self._catalog.get_unit_price_and_establishment(
                    line.catalog_entry_id
                ),
            )
            for line in cart.lines
        ]

    def subtotal(self, priced: list[PricedLine]) -> Money:
        return rounded_sum((p.unit_price, p.line.quantity) for p in priced)

    def recompute_total(self, cart: Cart) -> Money:
        """Re-derive ``cart.total`` from current prices and store it on the cart.

        The caller persists the cart within the same unit of work.
        """
        total = self.subtotal(self.price_lines(cart))
        cart.apply_total(total)
        return total

    @staticmethod
    def assert_single_establishment(cart: Cart, priced: list[PricedLine]) -> int:
        """Check every priced line still belongs to the cart's establishment.

        Returns the establishment ID.  Raises ConflictError if a catalog
        entry has moved to another establishment since it was added.
        """
        for p in priced:
            if p.price.establishment_id != cart.establishment_id:
                raise ConflictError(
                    f"Catalog entry #{p.line.catalog_entry_id} no longer belongs "
                    f"to establishment #{cart.establishment_id}"
                )
        return cart.establishment_id  # type: ignore[return-value]

"""Read-only data supplied by the catalog and establishment collaborators."""

from __future__ import annotations

from dataclasses import dataclass

from rxcart.domain.model.value_objects import Money


@dataclass(frozen=True)
class CatalogPrice:
    """Current sale price of a catalog entry and the establishment selling it."""

    catalog_entry_id: int
    unit_price: Money
    establishment_id: int


@dataclass(frozen=True)
class DeliveryConfig:
    """Delivery-fee policy of one establishment.

    Orders whose subtotal reaches ``minimum_order_value`` ship for free;
    anything below pays ``delivery_fee``.
    """

    establishment_id: int
    delivery_fee: Money
    minimum_order_value: Money


@dataclass(frozen=True)
class CatalogEntry:
    """A product as listed, and priced, by one establishment."""

    id: int
    establishment_id: int
    name: str
    price: Money

    def as_price(self) -> CatalogPrice:
        return CatalogPrice(
            catalog_entry_id=self.id,
            unit_price=self.price,
            establishment_id=self.establishment_id,
        )

"""Abstract ports for the catalog and establishment collaborators.

Both are read-only from this core's point of view: catalog management
and establishment settings live elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rxcart.domain.model.catalog import CatalogPrice, DeliveryConfig


class CatalogPriceLookup(ABC):

    @abstractmethod
    def get_unit_price_and_establishment(self, catalog_entry_id: int) -> CatalogPrice:
        """Return the current price and owner of a catalog entry.

        Raises EntityNotFoundError if the entry does not exist.
        """


class DeliveryConfigLookup(ABC):

    @abstractmethod
    def get_delivery_config(self, establishment_id: int) -> DeliveryConfig:
        """Return the delivery-fee policy of an establishment.

        Raises EntityNotFoundError if the establishment does not exist.
        """

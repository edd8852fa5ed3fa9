"""JSON-file-backed catalog and establishment lookups.

Both files are maintained by the catalog and establishment services;
this core only reads them.
"""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path

from rxcart.domain.exceptions import EntityNotFoundError, StorageError
from rxcart.domain.model.catalog import CatalogEntry, CatalogPrice, DeliveryConfig
from rxcart.domain.model.value_objects import DEFAULT_CURRENCY, Money
from rxcart.domain.repository.catalog_repository import (
    CatalogPriceLookup,
    DeliveryConfigLookup,
)


def _load_records(file_path: Path) -> list[dict]:
    if not file_path.exists():
        return []
    try:
        return json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise StorageError(f"Cannot read {file_path}: {exc}") from exc


def _money(raw: dict, key: str) -> Money:
    try:
        return Money(Decimal(str(raw[key])), raw.get("currency", DEFAULT_CURRENCY))
    except (KeyError, InvalidOperation) as exc:
        raise StorageError(f"Malformed {key!r} in record #{raw.get('id')}") from exc


class JsonCatalogRepository(CatalogPriceLookup):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- CatalogPriceLookup interface -----------------------------------------

    def get_unit_price_and_establishment(self, catalog_entry_id: int) -> CatalogPrice:
        for entry in self.list_all():
            if entry.id == catalog_entry_id:
                return entry.as_price()
        raise EntityNotFoundError(f"Catalog entry #{catalog_entry_id} not found")

    def list_all(self) -> list[CatalogEntry]:
        return [
            CatalogEntry(
                id=raw["id"],
                establishment_id=raw["establishment_id"],
                name=raw.get("name", ""),
                price=_money(raw, "price"),
            )
            for raw in _load_records(self._file_path)
        ]


class JsonEstablishmentRepository(DeliveryConfigLookup):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- DeliveryConfigLookup interface ---------------------------------------

    def get_delivery_config(self, establishment_id: int) -> DeliveryConfig:
        for raw in _load_records(self._file_path):
            if raw["id"] == establishment_id:
                return DeliveryConfig(
                    establishment_id=establishment_id,
                    delivery_fee=_money(raw, "delivery_fee"),
                    minimum_order_value=_money(raw, "minimum_order_value"),
                )
        raise EntityNotFoundError(f"Establishment #{establishment_id} not found")

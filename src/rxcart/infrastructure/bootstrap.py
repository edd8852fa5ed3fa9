"""Composition root: builds the JSON-backed adapters from the runtime settings.

Only this module and the CLI know which concrete adapters back the
repository interfaces.
"""

from __future__ import annotations

from functools import lru_cache

from rxcart.infrastructure.config import Settings, load_settings
from rxcart.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
    JsonEstablishmentRepository,
)
from rxcart.infrastructure.persistence.json_document_store import JsonDocumentStore
from rxcart.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


@lru_cache(maxsize=1)
def settings() -> Settings:
    return load_settings()


def unit_of_work() -> JsonUnitOfWork:
    return JsonUnitOfWork(JsonDocumentStore(settings().store_path))


def catalog_repository() -> JsonCatalogRepository:
    return JsonCatalogRepository(settings().catalog_path)


def establishment_repository() -> JsonEstablishmentRepository:
    return JsonEstablishmentRepository(settings().establishments_path)

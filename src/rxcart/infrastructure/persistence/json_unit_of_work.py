"""JSON-file-backed implementation of UnitOfWork.

Each transaction reads the store once, buffers every write in its
repositories, and on commit re-reads the store under its lock, checks
cart versions and replaces the file in one atomic write.  A commit with
no pending writes leaves the file alone.
"""

from __future__ import annotations

from functools import partial

import structlog

from rxcart.domain.repository.unit_of_work import UnitOfWork
from rxcart.infrastructure.persistence.json_cart_repository import JsonCartRepository
from rxcart.infrastructure.persistence.json_document_store import JsonDocumentStore
from rxcart.infrastructure.persistence.json_order_repository import JsonOrderRepository

logger = structlog.get_logger(__name__)


class JsonUnitOfWork(UnitOfWork):

    carts: JsonCartRepository
    orders: JsonOrderRepository

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    def _begin(self) -> None:
        snapshot = self._store.load()
        self.carts = JsonCartRepository(snapshot, partial(self._store.reserve_id, "carts"))
        self.orders = JsonOrderRepository(snapshot, partial(self._store.reserve_id, "orders"))

    def commit(self) -> None:
        if not (self.carts.has_pending or self.orders.has_pending):
            return

        with self._store.lock():
            document = self._store.load()
            self.carts.merge_into(document)
            self.orders.merge_into(document)
            self._store.replace(document)
        logger.debug("unit_of_work_committed", store=str(self._store.file_path))
        self._discard()

    def rollback(self) -> None:
        # Nothing has reached the file yet; dropping the buffers is enough.
        if hasattr(self, "carts"):
            self._discard()

    def _discard(self) -> None:
        self.carts.discard_pending()
        self.orders.discard_pending()

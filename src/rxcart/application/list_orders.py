"""Application services: order listings (queries)."""

from __future__ import annotations

from rxcart.application.dto import OrderDTO, order_to_dto
from rxcart.domain.repository.unit_of_work import UnitOfWork


class ListClientOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, client_id: int) -> list[OrderDTO]:
        with self._uow:
            orders = self._uow.orders.list_by_client(client_id)
        return [order_to_dto(o) for o in orders]


class ListEstablishmentOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, establishment_id: int) -> list[OrderDTO]:
        """Orders placed with an establishment, most recent first."""
        with self._uow:
            orders = self._uow.orders.list_by_establishment(establishment_id)
        return [order_to_dto(o) for o in orders]

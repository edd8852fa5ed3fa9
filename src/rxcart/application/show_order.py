"""Application service: Show Order use case (query)."""

from __future__ import annotations

from rxcart.application.dto import OrderDTO, order_to_dto
from rxcart.domain.exceptions import EntityNotFoundError
from rxcart.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order_to_dto(order)

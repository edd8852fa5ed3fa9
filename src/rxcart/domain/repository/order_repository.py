"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from rxcart.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_by_client(self, client_id: int) -> list[Order]:
        """Return every order placed by a client."""

    @abstractmethod
    def list_by_establishment(self, establishment_id: int) -> list[Order]:
        """Return every order placed with an establishment, newest first."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order.  Orders are never updated by this core."""

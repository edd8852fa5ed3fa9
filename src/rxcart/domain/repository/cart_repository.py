"""Abstract repository for the Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from rxcart.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique cart ID."""

    @abstractmethod
    def get_by_id(self, cart_id: int) -> Cart | None:
        """Return a cart with its lines, or None if not found."""

    @abstractmethod
    def get_by_client_id(self, client_id: int) -> Cart | None:
        """Return the client's cart, or None if the client has none yet."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart and bump its version."""

"""Abstract unit of work spanning the cart and order repositories.

Usage::

    with uow:
        cart = uow.carts.get_by_id(cart_id)
        ...
        uow.carts.save(cart)
        uow.commit()

Writes made through ``carts`` and ``orders`` become visible to other
units of work only on ``commit()``.  Leaving the block without
committing, or with an exception, rolls every write back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rxcart.domain.repository.cart_repository import CartRepository
from rxcart.domain.repository.order_repository import OrderRepository


class UnitOfWork(ABC):

    carts: CartRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        self._begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # Rolling back after a successful commit is a no-op.
        self.rollback()

    @abstractmethod
    def _begin(self) -> None:
        """Start a fresh transaction and bind ``carts`` / ``orders`` to it."""

    @abstractmethod
    def commit(self) -> None:
        """Make every pending write durable, all or nothing."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every pending write."""

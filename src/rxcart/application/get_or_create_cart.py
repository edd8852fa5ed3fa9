"""Application service: Get-or-Create Cart use case."""

from __future__ import annotations

import structlog

from rxcart.domain.exceptions import ValidationError
from rxcart.domain.model.cart import Cart
from rxcart.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


def get_or_create_cart(uow: UnitOfWork, client_id: int) -> Cart:
    """Return the client's cart, creating an empty one inside *uow* if needed.

    The caller owns the unit of work and must commit it.
    """
    if not isinstance(client_id, int) or isinstance(client_id, bool) or client_id <= 0:
        raise ValidationError(f"Invalid client ID: {client_id!r}")

    cart = uow.carts.get_by_client_id(client_id)
    if cart is None:
        cart = Cart.create(cart_id=uow.carts.next_id(), client_id=client_id)
        uow.carts.save(cart)
        logger.info("cart_created", cart_id=cart.id, client_id=client_id)
    return cart


class GetOrCreateCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, client_id: int) -> Cart:
        with self._uow:
            cart = get_or_create_cart(self._uow, client_id)
            self._uow.commit()
        return cart

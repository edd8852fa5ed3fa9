"""Application service: Checkout use case.

Turns a client's cart into an Order in a single unit of work:

1. load the cart (must belong to the client and hold at least one line)
2. price every line at the current catalog price
3. recompute the subtotal from those prices; the cart's stored total
   is never reused
4. apply the establishment's delivery-fee policy
5. create the order with by-value price snapshots
6. empty the cart
7. commit

Any failure before the commit completes rolls every write back and
leaves the cart exactly as it was.  The cart's version is checked at
commit time, so two racing checkouts of the same cart cannot both
succeed.
"""

from __future__ import annotations

import structlog

from rxcart.application.dto import CheckoutDetails
from rxcart.domain.exceptions import (
    DomainException,
    EmptyCartError,
    EntityNotFoundError,
    ValidationError,
)
from rxcart.domain.model.order import Order
from rxcart.domain.repository.catalog_repository import (
    CatalogPriceLookup,
    DeliveryConfigLookup,
)
from rxcart.domain.repository.unit_of_work import UnitOfWork
from rxcart.domain.service.cart_pricing_service import CartPricingService
from rxcart.domain.service.pricing import delivery_fee_for

logger = structlog.get_logger(__name__)


class CheckoutHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        catalog: CatalogPriceLookup,
        delivery: DeliveryConfigLookup,
    ) -> None:
        self._uow = uow
        self._catalog = catalog
        self._delivery = delivery

    def handle(self, client_id: int, cart_id: int, details: CheckoutDetails) -> Order:
        """Place an order from the cart.

        Raises:
            ValidationError: missing or malformed checkout details.
            EntityNotFoundError: no such cart for this client.
            EmptyCartError: the cart has no lines.
            ConflictError: a line's catalog entry changed establishment,
                or the cart was modified concurrently.
            StorageError: the store could not be read or written.
        """
        self._validate(details)
        pricing = CartPricingService(self._catalog)
        log = logger.bind(client_id=client_id, cart_id=cart_id)

        try:
            with self._uow:
                cart = self._uow.carts.get_by_id(cart_id)
                if cart is None or cart.client_id != client_id:
                    raise EntityNotFoundError(
                        f"Cart #{cart_id} not found for client #{client_id}"
                    )
                if cart.is_empty:
                    raise EmptyCartError(f"Cart #{cart_id} is empty")

                priced = pricing.price_lines(cart)
                establishment_id = pricing.assert_single_establishment(cart, priced)
                config = self._delivery.get_delivery_config(establishment_id)

                subtotal = pricing.subtotal(priced)
                delivery_fee = delivery_fee_for(subtotal, config)

                order = Order.create(
                    order_id=self._uow.orders.next_id(),
                    client_id=client_id,
                    establishment_id=establishment_id,
                    address_id=details.address_id,
                    payment_method_id=details.payment_method_id,
                    items=[
                        (p.line.catalog_entry_id, p.line.quantity, p.unit_price)
                        for p in priced
                    ],
                    subtotal=subtotal,
                    delivery_fee=delivery_fee,
                    notes=details.notes,
                )
                self._uow.orders.add(order)

                cart.clear()
                self._uow.carts.save(cart)

                self._uow.commit()
        except DomainException as exc:
            log.warning("checkout_failed", error=str(exc), error_type=type(exc).__name__)
            raise

        log.info(
            "checkout_completed",
            order_id=order.id,
            establishment_id=order.establishment_id,
            subtotal=str(order.subtotal),
            delivery_fee=str(order.delivery_fee),
            total=str(order.total),
        )
        return order

    @staticmethod
    def _validate(details: CheckoutDetails) -> None:
        for name, value in (
            ("Delivery address", details.address_id),
            ("Payment method", details.payment_method_id),
        ):
            if value is None:
                raise ValidationError(f"{name} is required")
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValidationError(f"{name} ID must be a positive integer, got {value!r}")
        if details.notes is not None and not isinstance(details.notes, str):
            raise ValidationError("Notes must be text")

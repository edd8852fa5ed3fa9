"""Order aggregate: the immutable result of a checkout.

An Order and its lines are created together, once, and never change
afterwards.  Prices are captured by value so later catalog changes do
not rewrite history.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from rxcart.domain.exceptions import ValidationError
from rxcart.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    AWAITING_PAYMENT = "Awaiting Payment"
    CONFIRMED = "Confirmed"
    PREPARING = "Preparing"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


@dataclass(frozen=True)
class OrderLine:
    """Price snapshot of one cart line at checkout time."""

    id: int
    order_id: int
    catalog_entry_id: int
    quantity: Quantity
    unit_price: Money  # locked at checkout

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class Order:
    """Aggregate root for placed orders.

    Use ``Order.create()`` for new orders; it enforces the checkout rules.
    The constructor stays simple so repositories can reconstitute
    persisted orders without re-validating.
    """

    id: int
    client_id: int
    establishment_id: int
    address_id: int
    payment_method_id: int
    lines: tuple[OrderLine, ...]
    subtotal: Money
    delivery_fee: Money
    status: OrderStatus = OrderStatus.AWAITING_PAYMENT
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        order_id: int,
        client_id: int,
        establishment_id: int,
        address_id: int,
        payment_method_id: int,
        items: list[tuple[int, Quantity, Money]],
        subtotal: Money,
        delivery_fee: Money,
        notes: str | None = None,
    ) -> Order:
        """Create a new order from ``(catalog_entry_id, quantity, unit_price)`` items."""
        if not items:
            raise ValidationError("Order must contain at least one item")

        lines = tuple(
            OrderLine(
                id=number,
                order_id=order_id,
                catalog_entry_id=entry_id,
                quantity=quantity,
                unit_price=unit_price,
            )
            for number, (entry_id, quantity, unit_price) in enumerate(items, start=1)
        )

        if notes is not None:
            notes = notes.strip() or None

        return Order(
            id=order_id,
            client_id=client_id,
            establishment_id=establishment_id,
            address_id=address_id,
            payment_method_id=payment_method_id,
            lines=lines,
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            notes=notes,
        )

    @property
    def total(self) -> Money:
        return self.subtotal + self.delivery_fee

    @property
    def delivery_waived(self) -> bool:
        return self.delivery_fee.is_zero

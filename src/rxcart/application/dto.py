"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from rxcart.domain.model.order import Order


@dataclass(frozen=True)
class CheckoutDetails:
    """Input: what the client supplies on top of the cart at checkout."""

    address_id: int
    payment_method_id: int
    notes: str | None = None


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a cart line priced at the current catalog price."""

    catalog_entry_id: int
    quantity: int
    unit_price: str  # formatted, e.g. "BRL 15.00"
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    id: int
    client_id: int
    establishment_id: int | None
    items: list[CartLineDTO]
    total: str


@dataclass(frozen=True)
class OrderLineDTO:
    catalog_entry_id: int
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    client_id: int
    establishment_id: int
    address_id: int
    payment_method_id: int
    status: str
    items: list[OrderLineDTO]
    subtotal: str
    delivery_fee: str
    total: str
    notes: str | None
    created_at: str


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        client_id=order.client_id,
        establishment_id=order.establishment_id,
        address_id=order.address_id,
        payment_method_id=order.payment_method_id,
        status=order.status.value,
        items=[
            OrderLineDTO(
                catalog_entry_id=line.catalog_entry_id,
                quantity=line.quantity.value,
                unit_price=str(line.unit_price),
                line_total=str(line.subtotal),
            )
            for line in order.lines
        ],
        subtotal=str(order.subtotal),
        delivery_fee=str(order.delivery_fee),
        total=str(order.total),
        notes=order.notes,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )

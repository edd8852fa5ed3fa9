"""Pricing rules shared by the cart and checkout.

Plain functions over value objects: no repositories, no I/O.
"""

from __future__ import annotations

from collections.abc import Iterable

from rxcart.domain.model.catalog import DeliveryConfig
from rxcart.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity


def line_subtotal(unit_price: Money, quantity: Quantity) -> Money:
    return unit_price * quantity.value


def rounded_sum(
    priced: Iterable[tuple[Money, Quantity]],
    currency: str | None = None,
) -> Money:
    """Sum ``unit_price × quantity`` over *priced* and round to the cent.

    Rounding happens once, on the sum, so per-line fractions of a cent are
    not lost before adding.
    """
    total: Money | None = None
    for unit_price, quantity in priced:
        subtotal = line_subtotal(unit_price, quantity)
        total = subtotal if total is None else total + subtotal
    if total is None:
        return Money.zero(currency or DEFAULT_CURRENCY)
    return total.rounded()


def delivery_fee_for(subtotal: Money, config: DeliveryConfig) -> Money:
    """Free delivery once the subtotal reaches the establishment's minimum."""
    if subtotal >= config.minimum_order_value:
        return Money.zero(subtotal.currency)
    return config.delivery_fee

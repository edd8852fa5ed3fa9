"""Integration tests for the Checkout use case."""

import pytest

from rxcart.application.add_cart_line import AddCartLineHandler
from rxcart.application.checkout import CheckoutHandler
from rxcart.application.dto import CheckoutDetails
from rxcart.application.get_or_create_cart import GetOrCreateCartHandler
from rxcart.domain.exceptions import (
    ConflictError,
    EmptyCartError,
    EntityNotFoundError,
    StorageError,
    ValidationError,
)
from rxcart.domain.model.catalog import CatalogEntry, DeliveryConfig
from rxcart.domain.model.order import OrderStatus
from rxcart.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeCatalog, FakeDeliveryConfig, FakeUnitOfWork

CLIENT_ID = 42
DETAILS = CheckoutDetails(address_id=3, payment_method_id=4, notes="Leave at the door")


def _setup(*lines: tuple[int, int]):
    """Build fakes and a cart for CLIENT_ID holding (entry_id, qty) lines."""
    catalog = FakeCatalog([
        CatalogEntry(id=1, establishment_id=1, name="Dipirona 500mg", price=Money.of("25.00")),
        CatalogEntry(id=2, establishment_id=1, name="Protetor Solar", price=Money.of("15.00")),
        CatalogEntry(id=3, establishment_id=1, name="Termometro", price=Money.of("99.99")),
        CatalogEntry(id=4, establishment_id=1, name="Nebulizador", price=Money.of("100.00")),
    ])
    delivery = FakeDeliveryConfig([
        DeliveryConfig(
            establishment_id=1,
            delivery_fee=Money.of("10.00"),
            minimum_order_value=Money.of("100.00"),
        ),
    ])
    uow = FakeUnitOfWork()
    cart = GetOrCreateCartHandler(uow).handle(CLIENT_ID)
    add = AddCartLineHandler(uow, catalog)
    for entry_id, qty in lines:
        add.handle(cart.id, entry_id, qty)
    handler = CheckoutHandler(uow, catalog, delivery)
    return handler, uow, catalog, cart.id


def _snapshot(uow: FakeUnitOfWork, cart_id: int):
    cart = uow.cart(cart_id)
    return (
        [(line.catalog_entry_id, line.quantity.value) for line in cart.lines],
        cart.total,
        cart.establishment_id,
    )


class TestCheckoutHappyPath:

    def test_creates_order_from_cart(self):
        handler, uow, _, cart_id = _setup((1, 2), (2, 1))

        order = handler.handle(CLIENT_ID, cart_id, DETAILS)

        assert order.status == OrderStatus.AWAITING_PAYMENT
        assert order.client_id == CLIENT_ID
        assert order.establishment_id == 1
        assert order.address_id == 3
        assert order.payment_method_id == 4
        assert order.notes == "Leave at the door"
        assert order.subtotal == Money.of("65.00")
        assert order.delivery_fee == Money.of("10.00")
        assert order.total == Money.of("75.00")
        assert uow.committed_orders[order.id] == order

    def test_order_lines_snapshot_cart_lines(self):
        handler, _, _, cart_id = _setup((1, 2), (2, 1))
        order = handler.handle(CLIENT_ID, cart_id, DETAILS)

        snap = [(line.catalog_entry_id, line.quantity, line.unit_price, line.subtotal) for line in order.lines]
        assert snap == [
            (1, Quantity(2), Money.of("25.00"), Money.of("50.00")),
            (2, Quantity(1), Money.of("15.00"), Money.of("15.00")),
        ]

    def test_empties_cart(self):
        handler, uow, _, cart_id = _setup((1, 2))
        handler.handle(CLIENT_ID, cart_id, DETAILS)

        cart = uow.cart(cart_id)
        assert cart.is_empty
        assert cart.total == Money.zero()
        assert cart.establishment_id is None

    def test_sequential_order_ids(self):
        handler, uow, catalog, cart_id = _setup((1, 1))
        first = handler.handle(CLIENT_ID, cart_id, DETAILS)
        AddCartLineHandler(uow, catalog).handle(cart_id, 2, 1)
        second = handler.handle(CLIENT_ID, cart_id, DETAILS)
        assert second.id == first.id + 1


class TestCheckoutDeliveryFee:

    def test_subtotal_at_minimum_waives_fee(self):
        handler, _, _, cart_id = _setup((4, 1))
        order = handler.handle(CLIENT_ID, cart_id, DETAILS)
        assert order.delivery_fee == Money.zero()
        assert order.total == Money.of("100.00")

    def test_subtotal_below_minimum_pays_fee(self):
        handler, _, _, cart_id = _setup((3, 1))
        order = handler.handle(CLIENT_ID, cart_id, DETAILS)
        assert order.delivery_fee == Money.of("10.00")
        assert order.total == Money.of("109.99")


class TestCheckoutPricing:

    def test_subtotal_uses_current_price_not_stored_total(self):
        handler, uow, catalog, cart_id = _setup((1, 2))
        assert uow.cart(cart_id).total == Money.of("50.00")

        catalog.set_price(1, "60.00")
        order = handler.handle(CLIENT_ID, cart_id, DETAILS)

        assert order.subtotal == Money.of("120.00")
        assert order.delivery_fee == Money.zero()
        assert order.lines[0].unit_price == Money.of("60.00")

    def test_order_price_unaffected_by_later_catalog_change(self):
        handler, uow, catalog, cart_id = _setup((1, 2))
        order = handler.handle(CLIENT_ID, cart_id, DETAILS)

        catalog.set_price(1, "1.00")

        saved = uow.committed_orders[order.id]
        assert saved.lines[0].unit_price == Money.of("25.00")
        assert saved.total == Money.of("60.00")


class TestCheckoutFailures:

    def test_empty_cart_rejected_and_nothing_created(self):
        handler, uow, _, cart_id = _setup()
        before = _snapshot(uow, cart_id)

        with pytest.raises(EmptyCartError):
            handler.handle(CLIENT_ID, cart_id, DETAILS)

        assert uow.committed_orders == {}
        assert _snapshot(uow, cart_id) == before

    def test_unknown_cart_rejected(self):
        handler, _, _, _ = _setup((1, 1))
        with pytest.raises(EntityNotFoundError, match="Cart #999"):
            handler.handle(CLIENT_ID, 999, DETAILS)

    def test_cart_of_another_client_rejected(self):
        handler, uow, _, cart_id = _setup((1, 1))
        with pytest.raises(EntityNotFoundError, match="not found for client #7"):
            handler.handle(7, cart_id, DETAILS)
        assert uow.committed_orders == {}

    @pytest.mark.parametrize(
        "details, message",
        [
            (CheckoutDetails(address_id=None, payment_method_id=4), "Delivery address is required"),  # type: ignore[arg-type]
            (CheckoutDetails(address_id=3, payment_method_id=None), "Payment method is required"),  # type: ignore[arg-type]
            (CheckoutDetails(address_id=0, payment_method_id=4), "positive integer"),
            (CheckoutDetails(address_id=3, payment_method_id=4, notes=12), "Notes must be text"),  # type: ignore[arg-type]
        ],
    )
    def test_invalid_details_rejected(self, details, message):
        handler, uow, _, cart_id = _setup((1, 1))
        with pytest.raises(ValidationError, match=message):
            handler.handle(CLIENT_ID, cart_id, details)
        assert uow.committed_orders == {}

    def test_order_write_failure_rolls_back(self):
        handler, uow, _, cart_id = _setup((1, 2), (2, 1))
        before = _snapshot(uow, cart_id)
        uow.fail_on_order_add = True

        with pytest.raises(StorageError):
            handler.handle(CLIENT_ID, cart_id, DETAILS)

        assert uow.committed_orders == {}
        assert _snapshot(uow, cart_id) == before

    def test_commit_failure_rolls_back(self):
        handler, uow, _, cart_id = _setup((1, 2))
        before = _snapshot(uow, cart_id)
        uow.fail_on_commit = True

        with pytest.raises(StorageError):
            handler.handle(CLIENT_ID, cart_id, DETAILS)

        assert uow.committed_orders == {}
        assert _snapshot(uow, cart_id) == before

    def test_entry_moved_to_other_establishment_rejected(self):
        handler, uow, catalog, cart_id = _setup((1, 1), (2, 1))
        catalog.move(2, establishment_id=8)

        with pytest.raises(ConflictError):
            handler.handle(CLIENT_ID, cart_id, DETAILS)
        assert uow.committed_orders == {}
        assert len(uow.cart(cart_id).lines) == 2

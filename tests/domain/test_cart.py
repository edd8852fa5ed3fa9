"""Unit tests for the Cart aggregate and its line rules."""

import pytest

from rxcart.domain.exceptions import ConflictError
from rxcart.domain.model.cart import Cart
from rxcart.domain.model.catalog import CatalogPrice
from rxcart.domain.model.value_objects import Money, Quantity


def _price(entry_id: int, establishment_id: int = 1, price: str = "10.00") -> CatalogPrice:
    return CatalogPrice(
        catalog_entry_id=entry_id,
        unit_price=Money.of(price),
        establishment_id=establishment_id,
    )


class TestCartCreation:

    def test_new_cart_is_empty(self):
        cart = Cart.create(cart_id=1, client_id=42)
        assert cart.is_empty
        assert cart.total == Money.zero()
        assert cart.establishment_id is None
        assert cart.version == 0


class TestAddLine:

    def test_first_line_sets_establishment(self):
        cart = Cart.create(1, 42)
        line = cart.add_line(_price(10, establishment_id=7), Quantity(2))
        assert line.catalog_entry_id == 10
        assert line.cart_id == 1
        assert cart.establishment_id == 7

    def test_duplicate_entry_merges_quantity(self):
        cart = Cart.create(1, 42)
        cart.add_line(_price(10), Quantity(2))
        line = cart.add_line(_price(10), Quantity(3))
        assert len(cart.lines) == 1
        assert line.quantity == Quantity(5)

    def test_lines_get_distinct_ids(self):
        cart = Cart.create(1, 42)
        a = cart.add_line(_price(10), Quantity(1))
        b = cart.add_line(_price(11), Quantity(1))
        assert a.id != b.id

    def test_cross_establishment_rejected(self):
        cart = Cart.create(1, 42)
        cart.add_line(_price(10, establishment_id=1), Quantity(1))
        with pytest.raises(ConflictError, match="cross-establishment"):
            cart.add_line(_price(20, establishment_id=2), Quantity(1))
        assert [line.catalog_entry_id for line in cart.lines] == [10]
        assert cart.establishment_id == 1


class TestRemoveLine:

    def test_remove_returns_one_then_zero(self):
        cart = Cart.create(1, 42)
        cart.add_line(_price(10), Quantity(1))
        cart.add_line(_price(11), Quantity(1))
        assert cart.remove_line(10) == 1
        assert cart.remove_line(10) == 0
        assert cart.establishment_id == 1

    def test_removing_last_line_releases_establishment(self):
        cart = Cart.create(1, 42)
        cart.add_line(_price(10, establishment_id=1), Quantity(1))
        cart.apply_total(Money.of("10.00"))
        cart.remove_line(10)
        assert cart.establishment_id is None
        assert cart.total == Money.zero()
        # Another establishment is now welcome.
        cart.add_line(_price(20, establishment_id=2), Quantity(1))
        assert cart.establishment_id == 2


class TestSetLineQuantity:

    def test_updates_existing_line(self):
        cart = Cart.create(1, 42)
        cart.add_line(_price(10), Quantity(1))
        updated = cart.set_line_quantity(10, Quantity(4))
        assert len(updated) == 1
        assert updated[0].quantity == Quantity(4)

    def test_missing_line_returns_nothing(self):
        cart = Cart.create(1, 42)
        assert cart.set_line_quantity(10, Quantity(4)) == []


class TestClear:

    def test_clear_drops_lines_and_resets(self):
        cart = Cart.create(1, 42)
        cart.add_line(_price(10), Quantity(1))
        cart.add_line(_price(11), Quantity(2))
        cart.apply_total(Money.of("30.00"))

        assert cart.clear() == 2
        assert cart.is_empty
        assert cart.total == Money.zero()
        assert cart.establishment_id is None

    def test_clear_empty_cart(self):
        assert Cart.create(1, 42).clear() == 0

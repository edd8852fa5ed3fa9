"""End-to-end tests of the command-line interface against a temporary data dir."""

import json

import pytest
from click.testing import CliRunner

from rxcart.infrastructure import bootstrap
from rxcart.infrastructure.cli.main import cli


@pytest.fixture
def runner(tmp_path, monkeypatch):
    (tmp_path / "catalog.json").write_text(json.dumps([
        {"id": 1, "establishment_id": 1, "name": "Dipirona", "price": "25.00"},
        {"id": 2, "establishment_id": 1, "name": "Protetor", "price": "15.00"},
        {"id": 9, "establishment_id": 2, "name": "Soro", "price": "8.75"},
    ]), encoding="utf-8")
    (tmp_path / "establishments.json").write_text(json.dumps([
        {"id": 1, "name": "Central", "delivery_fee": "10.00", "minimum_order_value": "100.00"},
        {"id": 2, "name": "Bairro", "delivery_fee": "7.50", "minimum_order_value": "60.00"},
    ]), encoding="utf-8")

    monkeypatch.setenv("RXCART_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("RXCART_ENV", "test")
    bootstrap.settings.cache_clear()
    yield CliRunner()
    bootstrap.settings.cache_clear()


def _ok(runner, *args):
    result = runner.invoke(cli, list(args))
    assert result.exit_code == 0, result.output
    return result.output


class TestCartCommands:

    def test_add_and_show(self, runner):
        _ok(runner, "cart", "add", "--client", "42", "--entry", "1", "--quantity", "2")
        _ok(runner, "cart", "add", "--client", "42", "--entry", "2")
        output = _ok(runner, "cart", "show", "--client", "42")
        assert "BRL 65.00" in output

    def test_cross_establishment_is_an_error(self, runner):
        _ok(runner, "cart", "add", "--client", "42", "--entry", "1")
        result = runner.invoke(cli, ["cart", "add", "--client", "42", "--entry", "9"])
        assert result.exit_code != 0
        assert "cross-establishment" in result.output

    def test_remove_missing_line_is_an_error(self, runner):
        result = runner.invoke(cli, ["cart", "remove", "--client", "42", "--entry", "1"])
        assert result.exit_code != 0
        assert "not in the cart" in result.output

    def test_set_quantity_and_clear(self, runner):
        _ok(runner, "cart", "add", "--client", "42", "--entry", "1")
        _ok(runner, "cart", "set-quantity", "--client", "42", "--entry", "1", "--quantity", "3")
        assert "BRL 75.00" in _ok(runner, "cart", "show", "--client", "42")
        assert "1 line(s) removed" in _ok(runner, "cart", "clear", "--client", "42")
        assert "Cart is empty." in _ok(runner, "cart", "show", "--client", "42")


class TestOrderCommands:

    def test_checkout_show_and_list(self, runner):
        _ok(runner, "cart", "add", "--client", "42", "--entry", "1", "--quantity", "2")
        output = _ok(
            runner, "order", "checkout", "--client", "42",
            "--address", "3", "--payment", "4", "--notes", "Portaria",
        )
        assert "Order #1 placed." in output
        assert "Awaiting Payment" in output
        assert "BRL 60.00" in output

        assert "Portaria" in _ok(runner, "order", "show", "--id", "1")
        assert "Awaiting Payment" in _ok(runner, "order", "list", "--client", "42")
        assert "Awaiting Payment" in _ok(runner, "order", "list", "--establishment", "1")
        assert "Cart is empty." in _ok(runner, "cart", "show", "--client", "42")

    def test_checkout_empty_cart_is_an_error(self, runner):
        result = runner.invoke(
            cli, ["order", "checkout", "--client", "42", "--address", "3", "--payment", "4"]
        )
        assert result.exit_code != 0
        assert "is empty" in result.output

    def test_list_requires_exactly_one_filter(self, runner):
        result = runner.invoke(cli, ["order", "list"])
        assert result.exit_code != 0


class TestCatalogCommands:

    def test_list(self, runner):
        output = _ok(runner, "catalog", "list")
        assert "Dipirona" in output
        assert "BRL 8.75" in output

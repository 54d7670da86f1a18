# tests/unit/test_cli.py
import click
import pytest
from click.testing import CliRunner

from sendr.cli import cli
from sendr.cli.place_order import parse_item
from sendr.core.exceptions import InsufficientStockError
from sendr.services.order_service import OrderService


def test_parse_item():
    assert parse_item("abc:2") == {"product_id": "abc", "qty": "2"}


def test_parse_item_rejects_missing_quantity():
    with pytest.raises(click.BadParameter):
        parse_item("abc")


def test_place_order_command(mocker):
    # Arrange
    place_order = mocker.patch.object(OrderService, "place_order", return_value="order-1")

    # Act
    result = CliRunner().invoke(cli, ["place-order", "--shop-id", "s1", "--item", "p1:2", "--item", "p2:1"])

    # Assert
    assert result.exit_code == 0, result.output
    assert "Order placed: order-1" in result.output
    place_order.assert_awaited_once_with(
        "s1", [{"product_id": "p1", "qty": "2"}, {"product_id": "p2", "qty": "1"}], customer_uid=None
    )


def test_place_order_command_reports_errors(mocker):
    mocker.patch.object(OrderService, "place_order", side_effect=InsufficientStockError("not enough stock for product p1"))

    result = CliRunner().invoke(cli, ["place-order", "--shop-id", "s1", "--item", "p1:99"])

    assert result.exit_code == 1
    assert "insufficient_stock: not enough stock for product p1" in result.output

# sendr/cli/place_order.py
import asyncio
import click

from sendr.core.exceptions import BaseServiceError
from sendr.database import engine
from sendr.dependencies import get_store
from sendr.services.order_service import OrderService


def parse_item(value: str) -> dict:
    """PRODUCT_ID:QTY -> {"product_id": ..., "qty": ...}"""
    product_id, sep, qty = value.rpartition(":")
    if not sep or not product_id:
        raise click.BadParameter(f"expected PRODUCT_ID:QTY, got '{value}'")
    return {"product_id": product_id, "qty": qty}


@click.command()
@click.option('--shop-id', required=True, help='Shop the order is placed with')
@click.option('--item', 'items', multiple=True, required=True, help='PRODUCT_ID:QTY, repeat for more items')
@click.option('--customer-uid', default=None, help='Optional customer uid')
def place_order(shop_id, items, customer_uid):
    """Place an order from the command line"""
    parsed = [parse_item(value) for value in items]

    async def _place():
        try:
            return await OrderService(get_store()).place_order(shop_id, parsed, customer_uid=customer_uid)
        finally:
            await engine.dispose()

    try:
        order_id = asyncio.run(_place())
    except BaseServiceError as e:
        raise click.ClickException(f"{e.kind}: {e.message}")

    click.echo(f"Order placed: {order_id}")


if __name__ == "__main__":
    place_order()

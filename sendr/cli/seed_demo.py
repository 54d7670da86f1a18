# sendr/cli/seed_demo.py
import asyncio
import click

from sendr.core.exceptions import ConflictError
from sendr.database import create_tables, engine
from sendr.dependencies import get_store
from sendr.schemas.product import ProductCreate
from sendr.schemas.vendor import VendorRegister
from sendr.services.product_service import ProductService
from sendr.services.vendor_service import VendorService

DEMO_VENDOR_UID = "demo-vendor"

DEMO_PRODUCTS = [
    ProductCreate(name="Fresh Tomatoes - 1 kg", price=60, quantity=10, unit="1 kg", category="fruits-veg"),
    ProductCreate(name="Amul Taaza Milk 500 ml", price=27, quantity=24, unit="500 ml", category="dairy-bakery"),
    ProductCreate(name="Brown Bread", price=45, quantity=8, unit="400 g", category="dairy-bakery"),
    ProductCreate(name="Lays Classic Salted", price=20, quantity=30, unit="52 g", category="snacks"),
]


@click.command()
@click.option('--vendor-uid', default=DEMO_VENDOR_UID, show_default=True, help='Uid for the demo vendor')
def seed_demo(vendor_uid):
    """Create a demo vendor, shop and a few products"""

    async def _seed():
        store = get_store()
        vendors = VendorService(store)
        products = ProductService(store)

        await create_tables()
        try:
            registration = await vendors.register_vendor(vendor_uid, VendorRegister(
                email="demo@sendr.local",
                shopName="Bala's Fresh Mart",
                name="Bala",
                address="MG Road, Bengaluru",
                pincode="560001",
                latitude=12.9716,
                longitude=77.5946,
            ))
        except ConflictError:
            click.echo(f"Vendor {vendor_uid} already exists, nothing to seed")
            return

        click.echo(f"Created shop {registration.shop_id} for vendor {vendor_uid}")
        for product_data in DEMO_PRODUCTS:
            product = await products.add_product(registration.shop_id, product_data, vendor_uid=vendor_uid)
            click.echo(f"  {product.id}  {product.name}  qty={product.quantity}  price={product.price}")

    async def _run():
        try:
            await _seed()
        finally:
            await engine.dispose()

    asyncio.run(_run())


if __name__ == "__main__":
    seed_demo()

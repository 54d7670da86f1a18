# tests/unit/services/test_vendor_service.py
import pytest

from sendr.core.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from sendr.schemas.vendor import VendorRegister
from sendr.services.order_service import OrderService
from sendr.services.vendor_service import VendorService


def _registration(**overrides):
    data = {
        "email": "new@example.com",
        "shopName": "Green Basket",
        "name": "Asha",
        "phone": "9876543210",
        "address": "2nd Cross, Indiranagar",
        "pincode": "560038",
        "latitude": 12.9784,
        "longitude": 77.6408,
    }
    data.update(overrides)
    return VendorRegister(**data)


async def test_register_vendor_creates_shop_and_profile(store):
    # Arrange
    service = VendorService(store)

    # Act
    result = await service.register_vendor("uid-new", _registration())

    # Assert
    vendor = await service.get_vendor("uid-new")
    assert vendor.uid == "uid-new"
    assert vendor.email == "new@example.com"
    assert vendor.shop_id == result.shop_id

    shop = await store.read_document("shops", result.shop_id)
    assert shop["name"] == "Green Basket"
    assert shop["vendor_uid"] == "uid-new"
    assert shop["latitude"] == pytest.approx(12.9784)


@pytest.mark.parametrize("uid, overrides", [
    ("", {}),
    ("uid-new", {"email": ""}),
    ("uid-new", {"shopName": "   "}),
    ("uid-new", {"email": None}),
])
async def test_register_vendor_requires_fields(store, uid, overrides):
    with pytest.raises(InvalidArgumentError) as exc_info:
        await VendorService(store).register_vendor(uid, _registration(**overrides))

    assert exc_info.value.message == "Fill required fields"
    assert await store.count("shops") == 0


async def test_register_existing_vendor_conflicts_and_writes_nothing(seeded_store):
    shops_before = await seeded_store.count("shops")

    with pytest.raises(ConflictError):
        await VendorService(seeded_store).register_vendor("v1", _registration())

    assert await seeded_store.count("shops") == shops_before


async def test_get_vendor_missing_raises(store):
    with pytest.raises(NotFoundError):
        await VendorService(store).get_vendor("nobody")


async def test_dashboard_lists_shop_products_and_order_count(seeded_store):
    await OrderService(seeded_store).place_order("s1", [{"product_id": "p1", "qty": 1}])

    dashboard = await VendorService(seeded_store).get_dashboard("v1")

    assert dashboard.vendor.uid == "v1"
    assert dashboard.shop.id == "s1"
    assert sorted(p.id for p in dashboard.products) == ["p1", "p2", "p_out"]
    assert dashboard.orders_count == 1


async def test_vendor_shop_id(seeded_store):
    assert await VendorService(seeded_store).get_vendor_shop_id("v2") == "s2"

# tests/test_routes/test_order_routes.py
import pytest

from sendr.core.exceptions import StoreUnavailableError
from sendr.services.order_service import OrderService


async def test_health(test_client):
    response = await test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_health_db(test_client):
    response = await test_client.get("/health/db")

    assert response.json()["database"] == "connected"


async def test_place_order_returns_201_with_order_id(test_client):
    # Act
    response = await test_client.post("/orders", json={
        "customerUid": "c1",
        "shopId": "s1",
        "items": [{"productId": "p1", "qty": 2}],
    })

    # Assert
    assert response.status_code == 201
    order_id = response.json()["order_id"]

    order = (await test_client.get(f"/orders/{order_id}")).json()
    assert order["total"] == pytest.approx(20.0)
    assert order["status"] == "placed"
    assert order["items"] == [{"product_id": "p1", "name": "Fresh Tomatoes - 1 kg", "qty": 2, "price": 10.0}]

    product = (await test_client.get("/products/p1")).json()
    assert product["quantity"] == 3


@pytest.mark.parametrize("payload, status_code, kind", [
    ({"shopId": "s1", "items": [{"productId": "p1", "qty": 50}]}, 409, "insufficient_stock"),
    ({"shopId": "s1", "items": [{"productId": "missing", "qty": 1}]}, 404, "not_found"),
    ({"shopId": "s1", "items": [{"qty": 1}]}, 400, "invalid_argument"),
    ({"shopId": "s1", "items": []}, 400, "invalid_argument"),
    ({"items": [{"productId": "p1", "qty": 1}]}, 400, "invalid_argument"),
    ({"shopId": "s1", "items": [{"productId": "p3", "qty": 1}]}, 400, "invalid_argument"),
    ({"shopId": "s1", "items": [{"productId": 5, "qty": 1}]}, 400, "invalid_argument"),
    ({"shopId": "s1", "items": [5]}, 400, "invalid_argument"),
    ({"shopId": 5, "items": [{"productId": "p1", "qty": 1}]}, 400, "invalid_argument"),
    ({"shopId": "s1", "items": "abc"}, 400, "invalid_argument"),
])
async def test_place_order_error_mapping(test_client, payload, status_code, kind):
    response = await test_client.post("/orders", json=payload)

    assert response.status_code == status_code
    assert response.json()["error"] == kind
    assert response.json()["detail"]

    product = (await test_client.get("/products/p1")).json()
    assert product["quantity"] == 5


async def test_store_failure_maps_to_503(test_client, mocker):
    mocker.patch.object(OrderService, "place_order", side_effect=StoreUnavailableError("database unreachable"))

    response = await test_client.post("/orders", json={"shopId": "s1", "items": [{"productId": "p1", "qty": 1}]})

    assert response.status_code == 503
    assert response.json() == {"detail": "database unreachable", "error": "store_unavailable"}


async def test_get_missing_order_is_404(test_client):
    response = await test_client.get("/orders/missing")

    assert response.status_code == 404


async def test_shop_routes(test_client):
    shops = (await test_client.get("/shops")).json()
    assert sorted(s["id"] for s in shops) == ["s1", "s2"]

    products = (await test_client.get("/shops/s2/products")).json()
    assert [p["id"] for p in products] == ["p3"]

    assert (await test_client.get("/shops/nope")).status_code == 404

    created = await test_client.post("/shops", json={"name": "Pop-up Stall"})
    assert created.status_code == 201
    assert created.json()["name"] == "Pop-up Stall"


async def test_shop_orders_listing(test_client):
    await test_client.post("/orders", json={"shopId": "s1", "items": [{"productId": "p2", "qty": 1}]})

    orders = (await test_client.get("/shops/s1/orders")).json()

    assert len(orders) == 1
    assert orders[0]["total"] == pytest.approx(25.0)


async def test_browse_route(test_client):
    response = await test_client.get("/browse", params={"lat": 12.972, "lng": 77.595, "radius_km": 5})

    assert response.status_code == 200
    items = response.json()
    assert {i["shop_id"] for i in items} == {"s1"}
    assert items[0]["shop"]["name"] == "Bala's Fresh Mart"

    assert (await test_client.get("/browse", params={"lat": 12.9})).status_code == 400


async def test_categories_route(test_client):
    categories = (await test_client.get("/categories")).json()

    assert categories[0] == {"id": "fruits-veg", "label": "Fruits & Vegetables"}
    assert len(categories) == 9

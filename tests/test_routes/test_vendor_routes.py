# tests/test_routes/test_vendor_routes.py

V1 = {"X-Vendor-Uid": "v1"}


async def test_vendor_routes_require_sign_in(test_client):
    response = await test_client.get("/vendor/dashboard")

    assert response.status_code == 401


async def test_register_vendor(test_client):
    response = await test_client.post(
        "/vendor/register",
        headers={"X-Vendor-Uid": "v9"},
        json={"email": "v9@example.com", "shopName": "Fresh Corner", "pincode": "560001"},
    )

    assert response.status_code == 201
    shop_id = response.json()["shop_id"]

    dashboard = (await test_client.get("/vendor/dashboard", headers={"X-Vendor-Uid": "v9"})).json()
    assert dashboard["shop"]["id"] == shop_id
    assert dashboard["products"] == []
    assert dashboard["orders_count"] == 0


async def test_register_vendor_errors(test_client):
    missing = await test_client.post("/vendor/register", headers={"X-Vendor-Uid": "v9"}, json={"email": "x@y.z"})
    assert missing.status_code == 400
    assert missing.json()["detail"] == "Fill required fields"

    existing = await test_client.post(
        "/vendor/register", headers=V1, json={"email": "x@y.z", "shopName": "Again"}
    )
    assert existing.status_code == 409
    assert existing.json()["error"] == "conflict"


async def test_vendor_product_lifecycle(test_client):
    # Add
    created = await test_client.post(
        "/vendor/products", headers=V1, json={"name": "Curd 400 g", "price": "35", "quantity": 2}
    )
    assert created.status_code == 201
    product_id = created.json()["id"]
    assert created.json()["available"] is True

    # Adjust down past zero
    adjusted = await test_client.post(f"/vendor/products/{product_id}/adjust", headers=V1, json={"delta": -5})
    assert adjusted.json() == {"product_id": product_id, "quantity": 0}

    # Cannot show without stock
    shown = await test_client.post(
        f"/vendor/products/{product_id}/availability", headers=V1, json={"available": True}
    )
    assert shown.status_code == 400

    # Restock via update
    updated = await test_client.patch(f"/vendor/products/{product_id}", headers=V1, json={"quantity": 6})
    assert updated.json()["quantity"] == 6
    assert updated.json()["available"] is True

    # Delete
    deleted = await test_client.delete(f"/vendor/products/{product_id}", headers=V1)
    assert deleted.status_code == 204
    assert (await test_client.get(f"/products/{product_id}")).status_code == 404


async def test_add_product_requires_name_and_price(test_client):
    response = await test_client.post("/vendor/products", headers=V1, json={"name": "Curd"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Name and price are required"


async def test_vendor_cannot_touch_other_shop_products(test_client):
    response = await test_client.post("/vendor/products/p3/adjust", headers=V1, json={"delta": 1})

    assert response.status_code == 404


async def test_unregistered_vendor_has_no_shop(test_client):
    response = await test_client.post(
        "/vendor/products", headers={"X-Vendor-Uid": "ghost"}, json={"name": "X", "price": 1}
    )

    assert response.status_code == 404


async def test_vendor_order_status(test_client):
    placed = await test_client.post("/orders", json={"shopId": "s1", "items": [{"productId": "p1", "qty": 1}]})
    order_id = placed.json()["order_id"]

    accepted = await test_client.patch(f"/vendor/orders/{order_id}/status", headers=V1, json={"status": "accepted"})
    assert accepted.status_code == 200
    assert accepted.json()["status"] == "accepted"

    other_vendor = await test_client.patch(
        f"/vendor/orders/{order_id}/status", headers={"X-Vendor-Uid": "v2"}, json={"status": "packed"}
    )
    assert other_vendor.status_code == 404

import pytest
from fastapi.testclient import TestClient

from retail_core.adapters.inbound.web.fastapi_app import create_app
from retail_core.bootstrap import build_service


@pytest.fixture
def client():
    return TestClient(create_app(build_service(seed=True)))


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_catalog_listing(client):
    body = client.get("/catalog").json()
    assert [it["id"] for it in body] == [101, 102, 201]
    assert body[0]["brand"] == "ASUS"
    assert body[2]["brand"] is None

    by_price = client.get("/catalog", params={"sort": "price"}).json()
    assert [it["id"] for it in by_price] == [201, 102, 101]


def test_get_item_and_not_found(client):
    assert client.get("/catalog/201").json()["price"] == "49.99"

    resp = client.get("/catalog/999")
    assert resp.status_code == 404
    assert resp.json()["type"] == "NotFoundError"


def test_add_catalog_item(client):
    payload = {"id": 301, "name": "Headphones", "price": "59.90", "stock": 4,
               "kind": "electronics", "warranty_months": 6, "brand": "Sony"}
    resp = client.post("/catalog", json=payload)
    assert resp.status_code == 201
    assert resp.json()["kind"] == "electronics"

    dup = client.post("/catalog", json=payload)
    assert dup.status_code == 400
    assert dup.json()["type"] == "ValidationError"


def test_negative_price_is_rejected_by_request_validation(client):
    resp = client.post("/catalog", json={"id": 5, "name": "x", "price": "-1", "stock": 1})
    assert resp.status_code == 400
    assert resp.json()["type"] == "RequestValidationError"


def test_cart_flow_and_checkout(client):
    resp = client.post("/cart/items", json={"product_id": 201, "quantity": 3})
    assert resp.status_code == 200
    assert resp.json()["total"] == "149.97"
    assert client.get("/catalog/201").json()["stock"] == 17

    too_many = client.post("/cart/items", json={"product_id": 201, "quantity": 100})
    assert too_many.status_code == 409
    assert too_many.json()["type"] == "InsufficientStockError"

    bad_qty = client.post("/cart/items", json={"product_id": 201, "quantity": 0})
    assert bad_qty.status_code == 400

    discount = client.get("/cart/discount", params={"rate": "0.1"}).json()
    assert discount["discounted_total"] == "134.97"
    assert client.get("/cart/discount", params={"rate": "1.5"}).status_code == 400

    order = client.post("/checkout")
    assert order.status_code == 201
    assert order.json()["order_id"] == 1
    assert order.json()["status"] == "Confirmed"
    assert client.get("/cart").json() == {"total": "0.00", "lines": []}

    assert client.get("/catalog/201").json()["stock"] == 20

    history = client.get("/orders").json()
    assert [o["order_id"] for o in history] == [1]

    one = client.get("/orders/1")
    assert one.status_code == 200
    assert one.json()["total"] == "149.97"
    assert [ln["quantity"] for ln in one.json()["lines"]] == [3]

    missing = client.get("/orders/42")
    assert missing.status_code == 404
    assert missing.json()["type"] == "NotFoundError"


def test_remove_and_clear(client):
    client.post("/cart/items", json={"product_id": 101, "quantity": 2})
    client.post("/cart/items", json={"product_id": 102, "quantity": 1})

    resp = client.delete("/cart/items/101")
    assert resp.status_code == 200
    assert [ln["product_id"] for ln in resp.json()["lines"]] == [102]
    assert client.get("/catalog/101").json()["stock"] == 10

    assert client.delete("/cart/items/101").status_code == 404

    cleared = client.delete("/cart")
    assert cleared.json()["lines"] == []
    assert client.get("/catalog/102").json()["stock"] == 15


def test_checkout_empty_cart_conflict(client):
    resp = client.post("/checkout")
    assert resp.status_code == 409
    assert resp.json()["type"] == "EmptyCartError"
    assert client.get("/orders").json() == []

# tests/test_api.py
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from inventory.main import create_app


@pytest.fixture
def client(store):
    return TestClient(create_app(store))


def _register(client, name="Widget", quantity=5, price="9.99", **kw):
    r = client.post("/products", json={"name": name, "quantity": quantity, "price": price, **kw})
    assert r.status_code == 201
    return r.json()


def test_add_and_get_product(client):
    body = _register(client, description="small", category="parts")
    assert body["id"] == 1
    assert body["price"] == "9.99"
    assert "lastUpdated" in body

    r = client.get("/products/1")
    assert r.status_code == 200
    assert r.json() == body


def test_add_invalid_product_is_400(client):
    r = client.post("/products", json={"name": " ", "quantity": 1, "price": "1"})
    assert r.status_code == 400
    r = client.post("/products", json={"name": "x", "quantity": -1, "price": "1"})
    assert r.status_code == 400
    assert client.get("/products").json() == []


def test_add_untyped_body_is_422(client):
    r = client.post("/products", json={"name": "x", "quantity": "lots", "price": "1"})
    assert r.status_code == 422


def test_list_filters(client):
    _register(client, "a", category="tools")
    _register(client, "b", category="tools", quantity=0)
    _register(client, "c", category="food")

    names = lambda r: [p["name"] for p in r.json()]
    assert names(client.get("/products")) == ["a", "b", "c"]
    assert names(client.get("/products", params={"category": "tools"})) == ["a", "b"]
    assert names(client.get("/products", params={"available_only": "true"})) == ["a", "c"]


def test_search(client):
    _register(client, "Blue Widget")
    _register(client, "Gadget", description="a WIDGET accessory")
    _register(client, "Other")

    r = client.get("/products/search", params={"term": "widget"})
    assert [p["name"] for p in r.json()] == ["Blue Widget", "Gadget"]


def test_update(client):
    _register(client)
    r = client.put("/products/1", json={"name": "Widget", "quantity": 10, "price": "9.99"})
    assert r.status_code == 200
    assert r.json()["quantity"] == 10
    assert client.get("/products/1").json()["quantity"] == 10


def test_update_unknown_is_404(client):
    r = client.put("/products/5", json={"name": "Ghost", "quantity": 1, "price": "1"})
    assert r.status_code == 404
    assert r.json()["detail"] == "product 5 not found"


def test_get_unknown_is_404(client):
    assert client.get("/products/9").status_code == 404


def test_delete(client):
    _register(client)
    assert client.delete("/products/1").json() == {"deleted": True}
    assert client.delete("/products/1").json() == {"deleted": False}
    assert client.get("/products").json() == []


def test_api_writes_through_to_store(client, store):
    _register(client, price="3.50")
    assert store.get_product(1).price == Decimal("3.50")

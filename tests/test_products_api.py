# tests/test_products_api.py
import json
import os

from shop_api import core
from shop_api.main import create_app


def _stored(settings):
    with open(settings.products_file, encoding="utf-8") as f:
        return json.load(f)


def _add(client, name="Mug", image_url="https://example.com/mug.jpg", price="19.99"):
    return client.post("/api/products", json={"name": name, "image_url": image_url, "price": price})


def test_list_on_fresh_store_is_empty(client, settings):
    r = client.get("/api/products")
    assert r.status_code == 200
    assert r.json() == {"products": []}
    assert _stored(settings) == {"products": []}


def test_create_appends_product_with_six_digit_id(client, settings):
    _add(client, name="First")
    before = _stored(settings)["products"]

    r = _add(client, name="Second")
    assert r.status_code == 201
    body = r.json()
    assert body["message"]
    product = body["product"]
    assert 100000 <= product["id"] <= 999999
    assert product["id"] not in [p["id"] for p in before]

    after = _stored(settings)["products"]
    assert len(after) == len(before) + 1
    assert after[-1] == product
    assert after[:-1] == before


def test_price_gets_dollar_prefix(client):
    assert _add(client, price="19.99").json()["product"]["price"] == "$19.99"
    assert _add(client, price="$19.99").json()["product"]["price"] == "$19.99"
    assert _add(client, price="  7 ").json()["product"]["price"] == "$7"


def test_numeric_price_is_accepted(client):
    r = _add(client, price=5)
    assert r.status_code == 201
    assert r.json()["product"]["price"] == "$5"


def test_invalid_prices_are_rejected(client, settings):
    for price in ("abc", "-5", "$-5", "$", "1.2.3"):
        r = _add(client, price=price)
        assert r.status_code == 400, price
        assert "error" in r.json()
    assert _stored(settings) == {"products": []}


def test_missing_or_empty_fields_are_rejected(client, settings):
    full = {"name": "Mug", "image_url": "https://example.com/mug.jpg", "price": "3"}
    for field in full:
        empty = dict(full, **{field: ""})
        assert client.post("/api/products", json=empty).status_code == 400

        missing = {k: v for k, v in full.items() if k != field}
        r = client.post("/api/products", json=missing)
        assert r.status_code == 400
        assert "error" in r.json()
    assert _stored(settings) == {"products": []}


def test_malformed_body_is_a_400(client):
    r = client.post("/api/products", json=["not", "an", "object"])
    assert r.status_code == 400
    assert "error" in r.json()


def test_delete_with_short_id_is_rejected(client, settings):
    _add(client)
    before = _stored(settings)
    r = client.delete("/api/products/12")
    assert r.status_code == 400
    assert "error" in r.json()
    assert _stored(settings) == before


def test_delete_unknown_id_is_404(client, settings):
    before = {"products": [{"id": 123456, "name": "A", "image_url": "u", "price": "$1"}]}
    with open(settings.products_file, "w", encoding="utf-8") as f:
        json.dump(before, f)

    r = client.delete("/api/products/999999")
    assert r.status_code == 404
    assert "error" in r.json()
    assert _stored(settings) == before


def test_delete_removes_exactly_one(client, settings):
    ids = [_add(client, name=f"p{i}").json()["product"]["id"] for i in range(3)]

    r = client.delete(f"/api/products/{ids[1]}")
    assert r.status_code == 200
    assert "message" in r.json()

    remaining = [p["id"] for p in _stored(settings)["products"]]
    assert remaining == [ids[0], ids[2]]
    assert client.get("/api/products").json()["products"] == _stored(settings)["products"]


def test_list_reflects_file_contents(client, settings):
    doc = {"products": [
        {"id": 123456, "name": "A", "image_url": "u", "price": "$1"},
        {"id": 654321, "name": "B", "image_url": "v", "price": "$2", "stock": 20},
    ]}
    with open(settings.products_file, "w", encoding="utf-8") as f:
        json.dump(doc, f)

    assert client.get("/api/products").json() == doc


def test_unreadable_catalog_is_a_500(client, settings):
    with open(settings.products_file, "w", encoding="utf-8") as f:
        f.write("{ not json")

    r = client.get("/api/products")
    assert r.status_code == 500
    assert "error" in r.json()


def test_existing_catalog_is_kept_on_startup(settings):
    doc = {"products": [{"id": 111111, "name": "A", "image_url": "u", "price": "$1"}]}
    with open(settings.products_file, "w", encoding="utf-8") as f:
        json.dump(doc, f)

    create_app(settings)
    assert _stored(settings) == doc


def test_cors_headers_on_every_route(client):
    origin = {"Origin": "https://shop.example.com"}
    r = client.get("/api/products", headers=origin)
    assert r.headers["access-control-allow-origin"] == "*"

    r = client.options("/api/products/123456", headers={
        **origin, "Access-Control-Request-Method": "DELETE",
    })
    assert r.status_code == 200
    assert "DELETE" in r.headers["access-control-allow-methods"]


def test_lone_surrogate_is_a_400(client, settings, tmp_path):
    r = client.post(
        "/api/products",
        content=r'{"name": "Mug \ud800", "image_url": "u", "price": "1"}',
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert "error" in r.json()
    assert sorted(p.name for p in tmp_path.iterdir()) == ["products.json"]
    assert _stored(settings) == {"products": []}


def test_write_failure_is_a_500(client, settings, monkeypatch):
    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", broken_replace)
    r = _add(client)
    monkeypatch.undo()

    assert r.status_code == 500
    assert "error" in r.json()
    assert _stored(settings) == {"products": []}


def test_full_id_space_is_a_503(client, settings, monkeypatch):
    monkeypatch.setattr(core, "ID_MAX", core.ID_MIN + 1)
    doc = {"products": [
        {"id": core.ID_MIN, "name": "A", "image_url": "u", "price": "$1"},
        {"id": core.ID_MIN + 1, "name": "B", "image_url": "v", "price": "$2"},
    ]}
    with open(settings.products_file, "w", encoding="utf-8") as f:
        json.dump(doc, f)

    r = _add(client)
    assert r.status_code == 503
    assert "error" in r.json()
    assert _stored(settings) == doc

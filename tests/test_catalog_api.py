"""Tests for product, option, category and attribute endpoints."""
import catalog.extensions as ext


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["db"] == "ok"
    assert data["redis"] == "not configured"


def test_health_does_not_leak_internal_errors(client, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("database password leaked")

    monkeypatch.setattr(ext.db.session, "execute", boom)

    resp = client.get("/health")
    assert resp.status_code == 503
    data = resp.get_json()
    assert data["db"] == "error"
    assert "password" not in str(data).lower()


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_product_crud(client):
    resp = client.post(
        "/api/products",
        json={"title": "Linen Summer Shirt", "vendor": "Acme", "status": "active"},
    )
    assert resp.status_code == 201
    product = resp.get_json()["data"]
    assert product["handle"] == "linen-summer-shirt"
    assert product["options"] == []

    resp = client.put(f"/api/products/{product['id']}", json={"title": "Linen Shirt"})
    assert resp.get_json()["data"]["handle"] == "linen-shirt"
    assert resp.get_json()["data"]["vendor"] == "Acme"

    resp = client.get(f"/api/products/{product['id']}")
    assert resp.get_json()["data"]["title"] == "Linen Shirt"

    assert client.delete(f"/api/products/{product['id']}").status_code == 200
    assert client.get(f"/api/products/{product['id']}").status_code == 404


def test_product_validation(client):
    resp = client.post("/api/products", json={"title": ""})
    assert resp.status_code == 400
    assert "title" in resp.get_json()["error"]

    resp = client.post("/api/products", json={"title": "X", "status": "published"})
    assert resp.status_code == 400


def test_duplicate_handle_is_rejected(client):
    client.post("/api/products", json={"title": "Canvas Tote"})
    resp = client.post("/api/products", json={"title": "Canvas Tote"})
    assert resp.status_code == 400
    assert "Handle" in resp.get_json()["error"]


def test_product_list_filters_and_paginates(client):
    client.post("/api/products", json={"title": "Wool Scarf", "status": "active"})
    client.post("/api/products", json={"title": "Wool Hat", "status": "draft"})
    client.post("/api/products", json={"title": "Silk Tie", "status": "active"})

    data = client.get("/api/products?search=wool").get_json()
    assert sorted(p["title"] for p in data["data"]) == ["Wool Hat", "Wool Scarf"]

    data = client.get("/api/products?status=active&limit=1").get_json()
    assert len(data["data"]) == 1
    assert data["pagination"]["total"] == 2
    assert data["pagination"]["pages"] == 2


def test_product_list_reports_variant_count(client):
    pid = client.post(
        "/api/products",
        json={"title": "Sock", "options": [{"name": "Size", "values": ["S", "M", "L"]}]},
    ).get_json()["data"]["id"]
    client.post(f"/api/products/{pid}/variants/generate", json={})

    row = client.get("/api/products").get_json()["data"][0]
    assert row["variant_count"] == 3


def test_product_with_category_fields(client):
    category = client.post("/api/categories", json={"name": "Apparel"}).get_json()["data"]

    resp = client.post(
        "/api/products",
        json={
            "title": "Field Jacket",
            "category_id": category["id"],
            "category_fields": {"material": "cotton", "waterproof": True, "blank": ""},
        },
    )

    product = resp.get_json()["data"]
    assert product["category"]["name"] == "Apparel"
    attrs = {a["key"]: a for a in product["attributes"]}
    assert set(attrs) == {"material", "waterproof"}
    assert attrs["waterproof"]["value"] == "true"
    assert attrs["waterproof"]["value_type"] == "boolean"


def test_product_with_missing_category(client):
    resp = client.post("/api/products", json={"title": "Ghost", "category_id": 42})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Category not found"


def test_option_endpoints(client):
    pid = client.post("/api/products", json={"title": "Hoodie"}).get_json()["data"]["id"]

    resp = client.post(f"/api/products/{pid}/options", json={"name": "Color", "values": ["Red", "Red"]})
    assert resp.status_code == 400

    resp = client.post(f"/api/products/{pid}/options", json={"name": "Color", "values": ["Red", "Grey"]})
    assert resp.status_code == 201
    option = resp.get_json()["option"]
    assert option["position"] == 1

    client.post(f"/api/products/{pid}/variants/generate", json={})
    resp = client.put(f"/api/products/{pid}/options/{option['id']}", json={"values": ["Red"]})
    assert resp.status_code == 400
    assert "Grey" in resp.get_json()["error"]

    resp = client.put(
        f"/api/products/{pid}/options/{option['id']}", json={"values": ["Red", "Grey", "Black"]}
    )
    assert resp.get_json()["option"]["values"] == ["Red", "Grey", "Black"]

    options = client.get(f"/api/products/{pid}/options").get_json()["options"]
    assert [o["name"] for o in options] == ["Color"]


def test_category_crud_and_fields(client):
    resp = client.post("/api/categories", json={"name": "Footwear", "shopify_product_type": "Shoes"})
    assert resp.status_code == 201
    cid = resp.get_json()["data"]["id"]

    assert client.post("/api/categories", json={"name": "Footwear"}).status_code == 400

    resp = client.post(f"/api/categories/{cid}/fields", json={"name": "Sole", "field_type": "select"})
    assert resp.status_code == 400

    resp = client.post(
        f"/api/categories/{cid}/fields",
        json={"name": "Sole", "field_type": "select", "options": ["Rubber", "Leather"]},
    )
    assert resp.status_code == 201
    fid = resp.get_json()["data"]["id"]

    resp = client.put(f"/api/categories/{cid}/fields/{fid}", json={"name": "Outsole", "required": True})
    assert resp.get_json()["data"]["required"] is True

    data = client.get(f"/api/categories/{cid}").get_json()["data"]
    assert [f["name"] for f in data["fields"]] == ["Outsole"]

    assert client.delete(f"/api/categories/{cid}/fields/{fid}").status_code == 200
    assert client.get(f"/api/categories/{cid}").get_json()["data"]["fields"] == []


def test_deleting_category_keeps_products(client):
    cid = client.post("/api/categories", json={"name": "Bags"}).get_json()["data"]["id"]
    pid = client.post(
        "/api/products", json={"title": "Duffel", "category_id": cid}
    ).get_json()["data"]["id"]

    assert client.delete(f"/api/categories/{cid}").status_code == 200

    product = client.get(f"/api/products/{pid}").get_json()["data"]
    assert product["category_id"] is None


def test_attribute_crud(client):
    pid = client.post(
        "/api/products",
        json={"title": "Beanie", "options": [{"name": "Color", "values": ["Black"]}]},
    ).get_json()["data"]["id"]
    client.post(f"/api/products/{pid}/variants/generate", json={})
    vid = client.get(f"/api/products/{pid}/variants").get_json()["variants"][0]["id"]

    resp = client.post(
        "/api/attributes",
        json={"product_id": pid, "variant_id": vid, "key": "gtin", "value": "0123"},
    )
    assert resp.status_code == 201
    aid = resp.get_json()["data"]["id"]

    resp = client.post(
        "/api/attributes",
        json={"product_id": pid, "variant_id": vid, "key": "gtin", "value": "9999"},
    )
    assert resp.status_code == 400

    resp = client.post("/api/attributes", json={"product_id": pid, "variant_id": 777, "key": "x"})
    assert resp.status_code == 400

    resp = client.put(
        f"/api/attributes/{aid}",
        json={"product_id": pid, "variant_id": vid, "key": "gtin", "value": "4567"},
    )
    assert resp.get_json()["data"]["value"] == "4567"

    data = client.get(f"/api/attributes?product_id={pid}").get_json()["data"]
    assert [a["key"] for a in data] == ["gtin"]

    assert client.delete(f"/api/attributes/{aid}").status_code == 200
    assert client.get(f"/api/attributes/{aid}").status_code == 404

# tests/test_products.py
import logging

from fastapi.testclient import TestClient
from catalog_api.main import app

client = TestClient(app)


def test_root_says_hello():
    r = client.get("/")
    assert r.status_code == 200
    assert r.text == "Hello World!"
    assert r.headers["content-type"].startswith("text/plain")

def test_list_defaults_to_first_page_of_ten():
    r = client.get("/api/products")
    assert r.status_code == 200
    body = r.json()
    assert [p["id"] for p in body["products"]] == [1, 2, 3, 4, 5, 6]
    assert body["pagination"] == {"currentPage": 1, "totalPages": 1, "totalProducts": 6}
    assert body["products"][0] == {
        "id": 1, "name": "Mobiles", "description": "Latest smartphones",
        "price": 699, "category": "Electronics", "inStock": True,
    }

def test_category_filter_is_case_insensitive():
    body = client.get("/api/products", params={"category": "eLeCtRoNiCs"}).json()
    assert body["pagination"]["totalProducts"] == 6
    assert all(p["category"].lower() == "electronics" for p in body["products"])

def test_unknown_category_gives_empty_page():
    body = client.get("/api/products", params={"category": "Books"}).json()
    assert body["products"] == []
    assert body["pagination"] == {"currentPage": 1, "totalPages": 0, "totalProducts": 0}

def test_last_page_and_past_the_end():
    last = client.get("/api/products", params={"page": 2, "limit": 4}).json()
    assert [p["id"] for p in last["products"]] == [5, 6]
    assert last["pagination"] == {"currentPage": 2, "totalPages": 2, "totalProducts": 6}
    page, limit = last["pagination"]["currentPage"], 4
    assert page * limit >= last["pagination"]["totalProducts"] - limit

    beyond = client.get("/api/products", params={"page": 3, "limit": 4}).json()
    assert beyond["products"] == []
    assert beyond["pagination"]["currentPage"] == 3

def test_bad_paging_values_fall_back_to_defaults():
    body = client.get("/api/products", params={"page": "abc", "limit": "0"}).json()
    assert body["pagination"]["currentPage"] == 1
    assert len(body["products"]) == 6

    body = client.get("/api/products", params={"page": "2", "limit": "2abc"}).json()
    assert [p["id"] for p in body["products"]] == [3, 4]
    assert body["pagination"]["totalPages"] == 3

def test_negative_paging_values_are_kept():
    body = client.get("/api/products", params={"page": "-1"}).json()
    assert body["products"] == []
    assert body["pagination"] == {"currentPage": -1, "totalPages": 1, "totalProducts": 6}

    body = client.get("/api/products", params={"limit": "-4"}).json()
    assert [p["id"] for p in body["products"]] == [1, 2]
    assert body["pagination"]["totalPages"] == -1

def test_search_matches_name_substring():
    r = client.get("/api/products/search", params={"q": "lap"})
    assert r.status_code == 200
    body = r.json()
    assert body["searchTerm"] == "lap"
    assert body["count"] == 1
    assert body["results"][0]["name"] == "Laptops"

def test_search_is_case_insensitive():
    body = client.get("/api/products/search", params={"q": "PHONE"}).json()
    assert [p["name"] for p in body["results"]] == ["Headphones"]

def test_search_without_hits():
    body = client.get("/api/products/search", params={"q": "zz"}).json()
    assert body["results"] == []
    assert body["count"] == 0

def test_search_requires_q():
    for params in ({}, {"q": ""}):
        r = client.get("/api/products/search", params=params)
        assert r.status_code == 400
        assert r.json() == {
            "error": "ValidationError",
            "message": 'Search query parameter "q" is required',
        }

def test_stats_over_seed_catalog():
    r = client.get("/api/products/stats")
    assert r.status_code == 200
    assert r.json() == {
        "totalProducts": 6,
        "categoryStats": {"Electronics": 6},
        "stockStats": {"inStock": 4, "outOfStock": 2},
    }

def test_get_product_by_id():
    r = client.get("/api/products/3")
    assert r.status_code == 200
    assert r.json()["product"]["name"] == "Headphones"

def test_get_missing_product_is_404():
    for pid in ("999", "abc", "0_1", "3_", "\u0663"):
        r = client.get(f"/api/products/{pid}")
        assert r.status_code == 404
        assert r.json() == {"error": "NotFoundError", "message": "Product not found"}

def test_get_product_reads_id_as_a_number():
    for pid in ("3.0", "0x3", "3e0"):
        assert client.get(f"/api/products/{pid}").json()["product"]["name"] == "Headphones"

def test_malformed_json_on_a_read_is_reported():
    r = client.request("GET", "/api/products", content="{oops",
                       headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "ValidationError", "message": "Invalid JSON format"}

def test_root_ignores_the_body():
    r = client.request("GET", "/", content="{oops", headers={"content-type": "application/json"})
    assert r.text == "Hello World!"

def test_unknown_route_keeps_error_shape():
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert r.json() == {"error": "NotFoundError", "message": "Route not found"}

def test_every_request_is_access_logged(caplog):
    with caplog.at_level(logging.INFO, logger="catalog_api.access"):
        client.get("/api/products?page=2")
        client.get("/api/does-not-exist")
    messages = [r.getMessage() for r in caplog.records if r.name == "catalog_api.access"]
    assert messages[0].startswith("GET /api/products?page=2 - ")
    assert messages[0].endswith("Z")
    assert messages[1].startswith("GET /api/does-not-exist - ")

# tests/test_products_api.py
import pytest


@pytest.fixture
def catalog(make_product):
    return {
        "cheap": make_product(name="Twin Mill", price="349.00", category="Classics"),
        "edge": make_product(name="Bone Shaker", price="500.00", category="Classics"),
        "mid": make_product(name="Deora II", price="1000.00", category="Premium"),
        "dear": make_product(name="Rodger Dodger", price="1299.00", category="Premium"),
    }


def _names(res):
    return sorted(p["name"] for p in res.json()["products"])


class TestListProducts:
    def test_default_page(self, client, catalog):
        res = client.get("/api/products")
        assert res.status_code == 200
        body = res.json()
        assert body["totalProducts"] == 4
        assert body["totalPages"] == 1
        assert body["currentPage"] == 1

    def test_category_is_case_insensitive(self, client, catalog):
        res = client.get("/api/products", params={"category": "PREMIUM"})
        assert _names(res) == ["Deora II", "Rodger Dodger"]
        assert res.json()["totalProducts"] == 2

    def test_all_category(self, client, catalog):
        assert client.get("/api/products", params={"category": "all"}).json()["totalProducts"] == 4

    @pytest.mark.parametrize(
        "price_range,expected",
        [
            ("under-500", ["Twin Mill"]),
            ("500-1000", ["Bone Shaker", "Deora II"]),
            ("above-1000", ["Rodger Dodger"]),
        ],
    )
    def test_price_ranges(self, client, catalog, price_range, expected):
        assert _names(client.get("/api/products", params={"priceRange": price_range})) == expected

    def test_invalid_price_range(self, client, catalog):
        res = client.get("/api/products", params={"priceRange": "cheap"})
        assert res.status_code == 400
        assert res.json() == {"message": "Invalid price range"}

    def test_search(self, client, catalog):
        assert _names(client.get("/api/products", params={"search": "dodg"})) == ["Rodger Dodger"]

    def test_search_wildcards_are_literal(self, client, catalog):
        assert client.get("/api/products", params={"search": "%"}).json()["totalProducts"] == 0
        assert client.get("/api/products", params={"search": "_"}).json()["totalProducts"] == 0

    def test_pagination(self, client, catalog):
        first = client.get("/api/products", params={"limit": 3}).json()
        second = client.get("/api/products", params={"limit": 3, "page": 2}).json()

        assert first["totalPages"] == 2
        assert len(first["products"]) == 3
        assert len(second["products"]) == 1
        ids = {p["id"] for p in first["products"] + second["products"]}
        assert ids == {p.id for p in catalog.values()}


class TestRestoreStock:
    def test_restores(self, client, make_user, make_product, auth, stock_of):
        user = make_user()
        p = make_product(stock=2)

        res = client.patch(f"/api/products/{p.id}/restore", json={"quantity": 3}, headers=auth(user))
        assert res.status_code == 200
        assert res.json() == {"message": "Stock restored"}
        assert stock_of(p.id) == 5

    def test_requires_token(self, client, make_product):
        p = make_product()
        assert client.patch(f"/api/products/{p.id}/restore", json={"quantity": 1}).status_code == 401

    def test_rejects_non_positive_quantity(self, client, make_user, make_product, auth):
        user = make_user()
        p = make_product()
        res = client.patch(f"/api/products/{p.id}/restore", json={"quantity": 0}, headers=auth(user))
        assert res.status_code == 400

    def test_unknown_product(self, client, make_user, auth):
        user = make_user()
        res = client.patch("/api/products/nope/restore", json={"quantity": 1}, headers=auth(user))
        assert res.status_code == 404
        assert res.json() == {"message": "Product not found"}

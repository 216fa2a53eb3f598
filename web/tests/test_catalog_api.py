"""Test the catalog API endpoints."""

import pytest


class TestProductsEndpoint:
    """Test GET /api/products."""

    def test_returns_all_in_order(self, client):
        response = client.get("/api/products")
        assert response.status_code == 200
        data = response.json
        assert data["count"] == 3
        assert [p["id"] for p in data["products"]] == ["panel-600", "mirror-900", "panel-350"]

    def test_limit(self, client):
        data = client.get("/api/products?limit=2").json
        assert [p["id"] for p in data["products"]] == ["panel-600", "mirror-900"]

    def test_limit_is_capped(self, app, client):
        app.config["MAX_LIMIT"] = 1
        assert client.get("/api/products?limit=50").json["count"] == 1

    def test_filters_combine(self, client):
        response = client.get("/api/products?category=panel&minPrice=200&maxWattage=800")
        assert [p["id"] for p in response.json["products"]] == ["panel-600"]

    def test_inverted_range_is_empty(self, client):
        response = client.get("/api/products?minPrice=500&maxPrice=100")
        assert response.status_code == 200
        assert response.json["products"] == []

    @pytest.mark.parametrize(
        "query",
        ["limit=ten", "minPrice=cheap", "maxWattage=1.5kW"],
    )
    def test_malformed_numbers_are_400(self, client, query):
        response = client.get(f"/api/products?{query}")
        assert response.status_code == 400
        assert "error" in response.json

    def test_product_wire_shape(self, client):
        product = client.get("/api/products?limit=1").json["products"][0]
        for key in (
            "id", "name", "path", "category", "description", "specifications",
            "features", "images", "variants", "price", "currency", "warranty",
        ):
            assert product[key] is not None, key
        assert product["description"] == {
            "html": "<p>Slim panel for offices.</p>",
            "plainText": "Slim panel for offices.",
        }
        assert product["specifications"]["mounting"] == "Wall mounted"
        assert product["variants"][0]["isDefault"] is True


class TestProductEndpoint:
    def test_found(self, client):
        response = client.get("/api/products/mirror-900")
        assert response.status_code == 200
        assert response.json["product"]["price"] == 449.99

    def test_not_found(self, client):
        response = client.get("/api/products/nope")
        assert response.status_code == 404
        assert response.json["product"] is None


class TestRangeEndpoints:
    def test_price_range_inclusive(self, client):
        response = client.get("/api/products/price-range?min=199.99&max=299.99")
        assert [p["id"] for p in response.json["products"]] == ["panel-600", "panel-350"]

    def test_wattage_range(self, client):
        response = client.get("/api/products/wattage-range?min=500&max=800")
        assert [p["id"] for p in response.json["products"]] == ["panel-600"]

    def test_missing_bound_is_400(self, client):
        assert client.get("/api/products/wattage-range?min=500").status_code == 400


class TestCategoriesEndpoint:
    def test_sorted_unique(self, client):
        response = client.get("/api/categories")
        assert response.json["categories"] == ["Mirror Heaters", "Panel Heaters"]

    def test_products_by_category(self, client):
        response = client.get("/api/categories/panel%20heaters/products")
        assert [p["id"] for p in response.json["products"]] == ["panel-600", "panel-350"]

    def test_unknown_category_is_empty(self, client):
        response = client.get("/api/categories/Radiators/products")
        assert response.status_code == 200
        assert response.json["count"] == 0


class TestSearchEndpoint:
    def test_search(self, client):
        response = client.get("/api/search?q=BATHROOM")
        assert [p["id"] for p in response.json["products"]] == ["mirror-900"]

    def test_search_requires_q(self, client):
        assert client.get("/api/search").status_code == 400


class TestMetadataAndHealth:
    def test_metadata(self, client):
        assert client.get("/api/metadata").json == {
            "scrapedAt": "2025-01-10T09:00:00Z",
            "totalProducts": 3,
            "source": "web_fixture",
            "categories": ["Mirror Heaters", "Panel Heaters"],
        }

    def test_health(self, client):
        data = client.get("/health").json
        assert data["status"] == "healthy"
        assert data["products"] == 3
        assert "3 products" in data["message"]

    def test_root(self, client):
        assert client.get("/").json["products"] == 3


class TestReloadEndpoint:
    def test_disabled_by_default(self, client):
        assert client.post("/api/reload").status_code == 403

    def test_reload_when_enabled(self, app, client):
        app.config["ALLOW_RELOAD"] = True
        response = client.post("/api/reload")
        assert response.status_code == 200
        assert response.json["status"] == "reloaded"
        assert response.json["totalProducts"] == 3

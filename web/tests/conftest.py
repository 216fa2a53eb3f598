"""Shared test fixtures for the web test suite."""

import pytest

from catalog.index import CatalogIndex
from catalog.loader import LoadResult
from catalog.models import CatalogMetadata
from web.app import create_app

RECORDS = [
    {
        "id": "panel-600",
        "name": "Infrared Panel Heater 600W",
        "category": "Panel Heaters",
        "components": {
            "description": {"content": {"html": "<p>Slim panel for offices.</p>"}},
            "specifications": {"chunks": [{"wattage": 600, "dimensions": "1000mm x 600mm"}]},
        },
        "variants": [{"name": "600W", "sku": "P-600", "price": 299.99, "isDefault": True}],
    },
    {
        "id": "mirror-900",
        "name": "Mirror Heater 900W",
        "category": "Mirror Heaters",
        "information": {"description": "Bathroom mirror heater."},
        "specifications": {"basic": {"wattage": 900}},
        "variants": [{"name": "900W", "sku": "M-900", "price": 449.99}],
    },
    {
        "id": "panel-350",
        "name": "Compact Panel 350W",
        "category": "Panel Heaters",
        "specifications": {"basic": {"wattage": 350}},
        "variants": [{"price": 199.99, "currency": "EUR"}],
    },
]


def _load_result():
    metadata = CatalogMetadata(
        scraped_at="2025-01-10T09:00:00Z", total_products=len(RECORDS), source="web_fixture"
    )
    return LoadResult([dict(r) for r in RECORDS], metadata)


@pytest.fixture
def catalog_index():
    return CatalogIndex(loader=_load_result).init()


@pytest.fixture
def app(catalog_index):
    """Flask app over the fixture catalog."""
    flask_app = create_app(catalog_index)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    with app.test_client() as test_client:
        yield test_client

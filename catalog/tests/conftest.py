"""Shared fixtures for the catalog test suite."""

import copy
import json
from pathlib import Path

import pytest

from catalog.index import CatalogIndex
from catalog.loader import LoadResult
from catalog.models import CatalogMetadata
from catalog.query import QueryEngine


COMPONENT_RECORD = {
    "id": "norko-panel-600",
    "name": "Norko Infrared Panel Heater 600W",
    "path": "/infrared-heaters/panel-heaters/norko-panel-600",
    "category": "Panel Heaters",
    "url": "https://heatshop.example/norko-panel-600",
    "scrapedAt": "2025-01-10T09:00:00Z",
    "components": {
        "description": {
            "content": {
                "html": "<p>Slim <strong>infrared</strong> panel for living rooms.</p>",
                "plainText": "Slim infrared panel for living rooms.",
            }
        },
        "specifications": {
            "chunks": [
                {
                    "wattage": 600,
                    "dimensions": "1000mm x 600mm",
                    "weight": 7.2,
                    "coverage": "12-15 m²",
                    "mounting": "Wall or ceiling mounted",
                    "efficiency": "98%",
                }
            ]
        },
        "features": {"content": {"html": "<ul><li>Silent</li><li>Thermostat ready</li></ul>"}},
        "productImages": {
            "images": [
                {"url": "https://heatshop.example/img/600-front.jpg", "altText": "Front view"},
                {"url": "https://heatshop.example/img/600-side.jpg", "alt": "Side view"},
            ]
        },
        "warranty": {"text": "5 year warranty"},
    },
    "variants": [
        {
            "name": "600W White",
            "sku": "NK-600-W",
            "price": 299.99,
            "priceVariants": [{"currency": "GBP"}],
            "stock": 4,
            "isDefault": True,
        },
        {
            "name": "600W Black",
            "sku": "NK-600-B",
            "price": 319.99,
            "priceVariants": [{"currency": "GBP"}],
            "stock": 2,
        },
    ],
}

FLAT_RECORD = {
    "id": "norko-mirror-900",
    "name": "Norko Mirror Heater 900W",
    "path": "/infrared-heaters/mirror-heaters/norko-mirror-900",
    "category": "Mirror Heaters",
    "information": {
        "description": "Frameless <em>mirror</em> heater for bathrooms.",
        "features": ["IP44 rated", "Anti-fog surface"],
        "warranty": "3 year warranty",
    },
    "specifications": {
        "basic": {"wattage": 900, "dimensions": "1200mm x 600mm", "weight": "11.5 kg"},
        "coverage": "18-22 m²",
    },
    "media": {"images": [{"url": "https://heatshop.example/img/mirror.jpg"}]},
    "variants": [
        {"name": "900W", "sku": "NK-MIR-900", "price": 449.99, "currency": "EUR"},
    ],
}


@pytest.fixture
def component_record():
    """A raw record in the component layout (600W, default variant 299.99)."""
    return copy.deepcopy(COMPONENT_RECORD)


@pytest.fixture
def flat_record():
    """A raw record in the flat layout (900W, single unflagged variant 449.99)."""
    return copy.deepcopy(FLAT_RECORD)


@pytest.fixture
def minimal_record():
    """A record with nothing but a name and one bare variant."""
    return {"id": "bare", "name": "Bare Heater", "variants": [{"price": 99}]}


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document to a temp file and return its path."""

    def _write(name, payload):
        path = tmp_path / name
        if isinstance(payload, str):
            path.write_text(payload, encoding="utf-8")
        else:
            path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def missing_path(tmp_path) -> Path:
    return tmp_path / "does-not-exist.json"


def make_index(*records) -> CatalogIndex:
    metadata = CatalogMetadata(
        scraped_at="2025-01-10T09:00:00Z",
        total_products=len(records),
        source="test_fixture",
    )
    return CatalogIndex(loader=lambda: LoadResult(list(records), metadata)).init()


@pytest.fixture
def engine(component_record, flat_record):
    """QueryEngine over the component and flat fixture records."""
    return QueryEngine(make_index(component_record, flat_record))


@pytest.fixture
def build_engine():
    """Factory: QueryEngine over the given raw records."""

    def _build(*records):
        return QueryEngine(make_index(*records))

    return _build

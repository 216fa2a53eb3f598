"""Deterministic sample catalog used when no data source yields records."""

from typing import List

from catalog.models import RawProductRecord

__all__ = ["generate_sample_products"]


def generate_sample_products() -> List[RawProductRecord]:
    """Return a small fixed set of raw records, one per layout family.

    A fresh list is built on every call so callers may keep it.
    """
    return [
        {
            "id": "sample-panel-heater",
            "name": "Sample Infrared Panel Heater",
            "path": "/infrared-heaters/panel-heaters/sample-panel-heater",
            "category": "Panel Heaters",
            "components": {
                "description": {
                    "content": {
                        "html": "<p>High-quality infrared panel heater for efficient heating.</p>",
                        "plainText": "High-quality infrared panel heater for efficient heating.",
                    }
                },
                "specifications": {
                    "chunks": [
                        {
                            "wattage": 900,
                            "dimensions": "1000mm x 800mm",
                            "weight": 8.5,
                            "coverage": "18-22 m²",
                            "mounting": "Wall or ceiling mounted",
                        }
                    ]
                },
                "features": {
                    "content": {
                        "html": "<ul><li>Energy efficient</li><li>Easy installation</li></ul>",
                        "plainText": "Energy efficient, Easy installation",
                    }
                },
                "productImages": {"images": []},
            },
            "variants": [
                {
                    "name": "900W",
                    "sku": "SAM-900W",
                    "price": 299.99,
                    "priceVariants": [{"currency": "GBP"}],
                    "stock": 10,
                    "isDefault": True,
                }
            ],
        },
        {
            "id": "sample-mirror-heater",
            "name": "Sample Infrared Mirror Heater",
            "path": "/infrared-heaters/mirror-heaters/sample-mirror-heater",
            "category": "Mirror Heaters",
            "information": {
                "description": "Frameless mirror heater that doubles as a bathroom mirror.",
                "features": ["IP44 rated", "Frameless design"],
                "warranty": "5 year manufacturer warranty",
            },
            "specifications": {
                "basic": {"wattage": 600, "dimensions": "900mm x 600mm", "weight": 9.0},
                "efficiency": "100% electrical efficiency",
            },
            "media": {"images": []},
            "variants": [
                {"name": "600W", "sku": "SAM-600W-MIR", "price": 349.99, "currency": "GBP", "stock": 5}
            ],
        },
    ]

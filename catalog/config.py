"""Configuration and constants for the catalog service."""

import os
from pathlib import Path

__all__ = [
    "PROJECT_ROOT",
    "PRIMARY_DATA_PATH",
    "FALLBACK_DATA_PATH",
    "REMOTE_DATA_URL",
    "REQUEST_TIMEOUT",
    "DEFAULT_LIMIT",
    "LOG_DIR",
    "DEFAULT_CURRENCY",
    "DEFAULT_STOCK",
    "DEFAULT_CATEGORY",
    "DEFAULT_DIMENSIONS",
    "DEFAULT_MOUNTING",
    "DEFAULT_EFFICIENCY",
    "DEFAULT_WARRANTY",
    "DEFAULT_IMAGE_ALT",
    "DEFAULT_DESCRIPTION_HTML",
    "DEFAULT_FEATURES_HTML",
]

# Project root (parent of 'catalog' directory)
PROJECT_ROOT = Path(__file__).parent.parent

# Data sources, tried in this order by the loader
PRIMARY_DATA_PATH = os.getenv(
    "CATALOG_PRIMARY_PATH", str(PROJECT_ROOT / "data" / "crystallize-products.json")
)
FALLBACK_DATA_PATH = os.getenv(
    "CATALOG_FALLBACK_PATH", str(PROJECT_ROOT / "data" / "products.json")
)

# Optional remote JSON export (e.g. a PIM feed). Skipped when unset.
REMOTE_DATA_URL = os.getenv("CATALOG_REMOTE_URL", "")
REQUEST_TIMEOUT = int(os.getenv("CATALOG_REQUEST_TIMEOUT", "15"))

# Query defaults
DEFAULT_LIMIT = int(os.getenv("CATALOG_DEFAULT_LIMIT", "20"))

# Daily JSONL event logs
LOG_DIR = Path(os.getenv("CATALOG_LOG_DIR", str(PROJECT_ROOT / "logs")))

# =============================================================================
# Normalization defaults
# =============================================================================
# Terminal values of the fallback chains. A canonical product never carries
# None for a required field; it carries one of these instead.

DEFAULT_CURRENCY = "GBP"
DEFAULT_STOCK = 10
DEFAULT_CATEGORY = "Uncategorized"
DEFAULT_DIMENSIONS = "Unknown"
DEFAULT_MOUNTING = "Wall mounted"
DEFAULT_EFFICIENCY = "Unknown"
DEFAULT_WARRANTY = "2 year manufacturer warranty"
DEFAULT_IMAGE_ALT = "Product image"
DEFAULT_DESCRIPTION_HTML = "<p>High-quality infrared heating solution.</p>"
DEFAULT_FEATURES_HTML = "<ul><li>Energy efficient heating</li></ul>"

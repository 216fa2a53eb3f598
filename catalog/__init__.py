"""Heater product catalog: normalization and query engine."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from catalog.errors import CatalogError, CatalogInitError, UnnormalizableRecord
from catalog.index import CatalogIndex
from catalog.loader import LoadResult, load
from catalog.models import CanonicalProduct, ProductFilter, ProductVariant
from catalog.normalizer import normalize, normalize_all
from catalog.query import QueryEngine
from catalog.shapes import RawShape, classify

__all__ = [
    # Version
    "__version__",
    # Errors
    "CatalogError",
    "CatalogInitError",
    "UnnormalizableRecord",
    # Models
    "CanonicalProduct",
    "ProductFilter",
    "ProductVariant",
    # Core functions
    "load",
    "LoadResult",
    "classify",
    "RawShape",
    "normalize",
    "normalize_all",
    "CatalogIndex",
    "QueryEngine",
]

"""Data models for canonical products and catalog metadata."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

__all__ = [
    "RawProductRecord",
    "RichText",
    "Specifications",
    "ProductImage",
    "ProductVariant",
    "CanonicalProduct",
    "CatalogMetadata",
    "ProductFilter",
    "BuildReport",
]

# A record as read from the data source. Shape varies, see catalog.shapes.
RawProductRecord = Dict[str, Any]


@dataclass(frozen=True)
class RichText:
    """HTML content with its plain-text rendition."""

    html: str
    plain_text: str

    def to_dict(self) -> Dict[str, str]:
        return {"html": self.html, "plainText": self.plain_text}


@dataclass(frozen=True)
class Specifications:
    wattage: int
    dimensions: str
    weight: float
    coverage: Optional[str]
    mounting: str
    efficiency: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wattage": self.wattage,
            "dimensions": self.dimensions,
            "weight": self.weight,
            "coverage": self.coverage,
            "mounting": self.mounting,
            "efficiency": self.efficiency,
        }


@dataclass(frozen=True)
class ProductImage:
    url: str
    alt_text: str

    def to_dict(self) -> Dict[str, str]:
        return {"url": self.url, "altText": self.alt_text}


@dataclass(frozen=True)
class ProductVariant:
    """A purchasable variant (e.g. a wattage option) of a product."""

    id: str
    name: str
    sku: str
    price: float
    currency: str
    stock: int
    is_default: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "sku": self.sku,
            "price": self.price,
            "currency": self.currency,
            "stock": self.stock,
            "isDefault": self.is_default,
        }


@dataclass(frozen=True)
class CanonicalProduct:
    """The reconciled, query-ready product.

    Built once by ``catalog.normalizer.normalize`` and never mutated.
    ``price`` and ``currency`` mirror the default variant; every product has
    at least one variant and exactly one of them is the default.
    """

    id: str
    name: str
    path: str
    category: str
    description: RichText
    specifications: Specifications
    features: RichText
    images: Tuple[ProductImage, ...]
    variants: Tuple[ProductVariant, ...]
    price: float
    currency: str
    warranty: str
    source_url: Optional[str] = None
    extracted_at: Optional[str] = None

    @property
    def default_variant(self) -> ProductVariant:
        for variant in self.variants:
            if variant.is_default:
                return variant
        return self.variants[0]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase wire shape."""
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "category": self.category,
            "description": self.description.to_dict(),
            "specifications": self.specifications.to_dict(),
            "features": self.features.to_dict(),
            "images": [image.to_dict() for image in self.images],
            "variants": [variant.to_dict() for variant in self.variants],
            "price": self.price,
            "currency": self.currency,
            "sourceUrl": self.source_url,
            "extractedAt": self.extracted_at,
            "warranty": self.warranty,
        }


@dataclass(frozen=True)
class CatalogMetadata:
    """Descriptive information about a loaded data set."""

    scraped_at: str
    total_products: int
    source: str
    categories: Tuple[str, ...] = ()
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "scrapedAt": self.scraped_at,
            "totalProducts": self.total_products,
            "source": self.source,
            "categories": list(self.categories),
        }
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class ProductFilter:
    """Optional predicates for ``QueryEngine.list``; all present ones are ANDed.

    ``None`` means "not supplied". A bound of 0 is a real bound.
    """

    category: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    min_wattage: Optional[int] = None
    max_wattage: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ProductFilter":
        """Build a filter from camelCase keys (``minPrice`` etc.)."""
        data = data or {}
        return cls(
            category=data.get("category"),
            min_price=data.get("minPrice"),
            max_price=data.get("maxPrice"),
            min_wattage=data.get("minWattage"),
            max_wattage=data.get("maxWattage"),
        )

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.category,
                self.min_price,
                self.max_price,
                self.min_wattage,
                self.max_wattage,
            )
        )


@dataclass(frozen=True)
class BuildReport:
    """Outcome of normalizing a raw record set."""

    normalized: int = 0
    skipped: Tuple[str, ...] = ()

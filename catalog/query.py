"""Read-only queries over the catalog index.

Query parameters are data: nonsensical values (negative limits, ``min > max``
ranges, unknown ids) give empty results, never exceptions.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence

from catalog.config import DEFAULT_LIMIT
from catalog.index import CatalogIndex
from catalog.models import CanonicalProduct, ProductFilter

__all__ = ["QueryEngine", "Predicate", "build_predicates"]

Predicate = Callable[[CanonicalProduct], bool]


def _in_range(value: float, low: Optional[float], high: Optional[float]) -> bool:
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def build_predicates(product_filter: Optional[ProductFilter]) -> List[Predicate]:
    """Translate a filter into predicates; absent fields add none."""
    if product_filter is None or product_filter.is_empty():
        return []

    predicates: List[Predicate] = []
    if product_filter.category is not None:
        needle = product_filter.category.lower()
        predicates.append(lambda p: needle in p.category.lower())

    low_price, high_price = product_filter.min_price, product_filter.max_price
    if low_price is not None or high_price is not None:
        predicates.append(lambda p: _in_range(p.price, low_price, high_price))

    low_watt, high_watt = product_filter.min_wattage, product_filter.max_wattage
    if low_watt is not None or high_watt is not None:
        predicates.append(lambda p: _in_range(p.specifications.wattage, low_watt, high_watt))

    return predicates


def _matches_all(product: CanonicalProduct, predicates: Sequence[Predicate]) -> bool:
    return all(predicate(product) for predicate in predicates)


class QueryEngine:
    """Answers product queries against a CatalogIndex.

    Each call reads the index snapshot once, so a concurrent reload never
    mixes old and new products in a single result.
    """

    def __init__(self, index: CatalogIndex):
        self.index = index

    def _products(self):
        return self.index.snapshot.products

    def list(
        self, limit: int = DEFAULT_LIMIT, product_filter: Optional[ProductFilter] = None
    ) -> List[CanonicalProduct]:
        """Products matching every filter field, in ingestion order, at most ``limit``."""
        if limit <= 0:
            return []
        predicates = build_predicates(product_filter)
        results: List[CanonicalProduct] = []
        for product in self._products():
            if _matches_all(product, predicates):
                results.append(product)
                if len(results) >= limit:
                    break
        return results

    def get_by_id(self, product_id: str) -> Optional[CanonicalProduct]:
        return self.index.get(product_id)

    def list_categories(self) -> List[str]:
        """Distinct categories, sorted ascending (case-sensitive)."""
        return list(self.index.snapshot.categories)

    def by_category(self, category: str) -> List[CanonicalProduct]:
        """Case-insensitive exact category match."""
        wanted = category.lower()
        return [p for p in self._products() if p.category.lower() == wanted]

    def search(self, query: str) -> List[CanonicalProduct]:
        """Case-insensitive substring search over name, description and category."""
        term = query.lower()
        return [
            p
            for p in self._products()
            if term in p.name.lower()
            or term in p.description.plain_text.lower()
            or term in p.category.lower()
        ]

    def by_price_range(self, min_price: float, max_price: float) -> List[CanonicalProduct]:
        """Products priced within ``[min_price, max_price]``."""
        return [p for p in self._products() if min_price <= p.price <= max_price]

    def by_wattage_range(self, min_wattage: int, max_wattage: int) -> List[CanonicalProduct]:
        """Products rated within ``[min_wattage, max_wattage]`` watts."""
        return [p for p in self._products() if min_wattage <= p.specifications.wattage <= max_wattage]

    def metadata(self) -> Dict[str, Any]:
        snapshot = self.index.snapshot
        return {
            "scrapedAt": snapshot.metadata.scraped_at,
            "totalProducts": len(snapshot.products),
            "source": snapshot.metadata.source,
            "categories": list(snapshot.categories),
        }

    def health(self) -> str:
        return f"Catalog API is running! {len(self._products())} products loaded."

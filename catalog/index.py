"""In-memory catalog index.

The index owns one immutable snapshot: the canonical products in ingestion
order plus an id lookup. ``reload()`` builds a complete new snapshot and
swaps the reference in one assignment, so a reader that grabbed the old
snapshot keeps seeing it unchanged.
"""

import threading
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple

from catalog.errors import CatalogInitError
from catalog.loader import LoadResult, load, sample_result
from catalog.logging_config import get_logger, log_catalog_event
from catalog.models import BuildReport, CanonicalProduct, CatalogMetadata
from catalog.normalizer import normalize_all

__all__ = ["CatalogIndex", "Snapshot", "build_snapshot"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class Snapshot:
    products: Tuple[CanonicalProduct, ...]
    by_id: Mapping[str, CanonicalProduct]
    categories: Tuple[str, ...]
    metadata: CatalogMetadata
    report: BuildReport


def build_snapshot(load_result: LoadResult) -> Snapshot:
    """Normalize loader output into a snapshot.

    Raises:
        CatalogInitError: No record could be normalized.
    """
    products, report = normalize_all(load_result.records)
    if not products:
        raise CatalogInitError(
            f"none of {len(load_result.records)} records from "
            f"{load_result.metadata.source} could be normalized"
        )

    by_id: Dict[str, CanonicalProduct] = {p.id: p for p in products}
    categories = tuple(sorted({p.category for p in products}))
    metadata = replace(
        load_result.metadata,
        total_products=len(products),
        categories=categories,
    )
    log_catalog_event(
        "index_built",
        {
            "message": f"Catalog index built: {len(products)} products, {len(categories)} categories",
            "source": metadata.source,
            "products": len(products),
            "skipped": len(report.skipped),
        },
    )
    return Snapshot(
        products=tuple(products),
        by_id=MappingProxyType(by_id),
        categories=categories,
        metadata=metadata,
        report=report,
    )


class CatalogIndex:
    """Holds the current catalog snapshot.

    Usage::

        index = CatalogIndex()
        index.init(load())
        engine = QueryEngine(index)
    """

    def __init__(self, loader: Callable[[], LoadResult] = load):
        self._loader = loader
        self._snapshot: Optional[Snapshot] = None
        self._reload_lock = threading.Lock()

    def init(self, load_result: Optional[LoadResult] = None) -> "CatalogIndex":
        """Build the index from loader output (runs the loader when omitted).

        When no record of the loaded source survives normalization the index
        starts on sample data instead, with the reason in ``metadata.error``.
        """
        result = load_result if load_result is not None else self._loader()
        try:
            self._snapshot = build_snapshot(result)
        except CatalogInitError as exc:
            logger.warning("%s, serving sample products", exc)
            self._snapshot = build_snapshot(sample_result(error=str(exc)))
        return self

    def reload(self) -> Snapshot:
        """Rebuild from the loader and swap the snapshot atomically.

        Unlike ``init()`` there is no sample fallback: if the rebuild fails
        the current snapshot stays in place and the error propagates.
        """
        with self._reload_lock:
            snapshot = build_snapshot(self._loader())
            self._snapshot = snapshot
        log_catalog_event("reload", {"message": "Catalog reloaded", "products": len(snapshot.products)})
        return snapshot

    @property
    def is_ready(self) -> bool:
        return self._snapshot is not None

    @property
    def snapshot(self) -> Snapshot:
        """The current snapshot. Read it once per operation."""
        snapshot = self._snapshot
        if snapshot is None:
            raise CatalogInitError("catalog index used before init()")
        return snapshot

    @property
    def products(self) -> Tuple[CanonicalProduct, ...]:
        return self.snapshot.products

    @property
    def categories(self) -> Tuple[str, ...]:
        return self.snapshot.categories

    @property
    def metadata(self) -> CatalogMetadata:
        return self.snapshot.metadata

    def get(self, product_id: str) -> Optional[CanonicalProduct]:
        return self.snapshot.by_id.get(product_id)

    def __len__(self) -> int:
        return len(self.snapshot.products)

"""Exceptions raised by the catalog package.

Data-loading problems are never raised: the loader reports them as probe
outcomes (see ``catalog.loader``). Query parameters are data, so the query
engine never raises for them either. What is left is small.
"""

__all__ = ["CatalogError", "UnnormalizableRecord", "CatalogInitError"]


class CatalogError(Exception):
    """Base class for catalog errors."""


class UnnormalizableRecord(CatalogError):
    """A raw record cannot become a canonical product (no name, no variants)."""

    def __init__(self, record_id: str, reason: str):
        super().__init__(f"{record_id}: {reason}")
        self.record_id = record_id
        self.reason = reason


class CatalogInitError(CatalogError):
    """The catalog index has no usable snapshot."""

"""API endpoints for catalog queries.

Every route maps one-to-one onto a QueryEngine operation:

    GET  /api/products                      list (limit + filter params)
    GET  /api/products/<id>                 get by id
    GET  /api/products/price-range          inclusive price range
    GET  /api/products/wattage-range        inclusive wattage range
    GET  /api/categories                    sorted category names
    GET  /api/categories/<name>/products    exact category (case-insensitive)
    GET  /api/search?q=...                  substring search
    GET  /api/metadata                      catalog metadata
    POST /api/reload                        rebuild the index (if enabled)

Malformed numbers are rejected with 400. Well-formed but unsatisfiable
values (e.g. min > max) simply return an empty list.
"""

import logging
from typing import Callable, List, Optional, Tuple, TypeVar, Union

from flask import Blueprint, Response, current_app, jsonify, request

from catalog.config import DEFAULT_LIMIT
from catalog.errors import CatalogError
from catalog.models import CanonicalProduct, ProductFilter
from catalog.query import QueryEngine

__all__ = ["api", "BadParameter", "get_engine"]

logger = logging.getLogger(__name__)

# Create blueprint for API
api = Blueprint("api", __name__, url_prefix="/api")

T = TypeVar("T")


class BadParameter(ValueError):
    """A query parameter could not be parsed."""


def get_engine() -> QueryEngine:
    """Get the QueryEngine registered on the current app."""
    return current_app.extensions["catalog_engine"]


def _arg(name: str, convert: Callable[[str], T], required: bool = False) -> Optional[T]:
    raw = request.args.get(name)
    if raw is None or raw.strip() == "":
        if required:
            raise BadParameter(f"{name} is required")
        return None
    try:
        return convert(raw.strip())
    except ValueError:
        raise BadParameter(f"{name} must be a {convert.__name__}, got {raw!r}") from None


def _products_response(products: List[CanonicalProduct]) -> Response:
    return jsonify({"count": len(products), "products": [p.to_dict() for p in products]})


@api.errorhandler(BadParameter)
def handle_bad_parameter(exc: BadParameter) -> Tuple[Response, int]:
    return jsonify({"error": str(exc)}), 400


@api.route("/products", methods=["GET"])
def list_products() -> Response:
    """List products with optional filters.

    Query params:
        limit: maximum number of products (default 20)
        category: case-insensitive category substring
        minPrice, maxPrice: inclusive price bounds
        minWattage, maxWattage: inclusive wattage bounds
    """
    limit = _arg("limit", int)
    if limit is None:
        limit = DEFAULT_LIMIT
    limit = min(limit, current_app.config.get("MAX_LIMIT", limit))

    product_filter = ProductFilter.from_dict(
        {
            "category": _arg("category", str),
            "minPrice": _arg("minPrice", float),
            "maxPrice": _arg("maxPrice", float),
            "minWattage": _arg("minWattage", int),
            "maxWattage": _arg("maxWattage", int),
        }
    )
    return _products_response(get_engine().list(limit, product_filter))


@api.route("/products/price-range", methods=["GET"])
def products_by_price_range() -> Response:
    min_price = _arg("min", float, required=True)
    max_price = _arg("max", float, required=True)
    return _products_response(get_engine().by_price_range(min_price, max_price))


@api.route("/products/wattage-range", methods=["GET"])
def products_by_wattage_range() -> Response:
    min_wattage = _arg("min", int, required=True)
    max_wattage = _arg("max", int, required=True)
    return _products_response(get_engine().by_wattage_range(min_wattage, max_wattage))


@api.route("/products/<product_id>", methods=["GET"])
def get_product(product_id: str) -> Union[Tuple[Response, int], Response]:
    product = get_engine().get_by_id(product_id)
    if product is None:
        return jsonify({"error": f"product {product_id} not found", "product": None}), 404
    return jsonify({"product": product.to_dict()})


@api.route("/categories", methods=["GET"])
def list_categories() -> Response:
    return jsonify({"categories": get_engine().list_categories()})


@api.route("/categories/<path:category>/products", methods=["GET"])
def products_by_category(category: str) -> Response:
    return _products_response(get_engine().by_category(category))


@api.route("/search", methods=["GET"])
def search_products() -> Response:
    """Case-insensitive substring search. ``q`` is required."""
    query = request.args.get("q")
    if query is None:
        raise BadParameter("q is required")
    return _products_response(get_engine().search(query))


@api.route("/metadata", methods=["GET"])
def catalog_metadata() -> Response:
    return jsonify(get_engine().metadata())


@api.route("/reload", methods=["POST"])
def reload_catalog() -> Union[Tuple[Response, int], Response]:
    """Rebuild the index from the data sources and swap it in."""
    if not current_app.config.get("ALLOW_RELOAD"):
        return jsonify({"error": "reload is disabled"}), 403

    engine = get_engine()
    try:
        snapshot = engine.index.reload()
    except CatalogError as exc:
        logger.error("Catalog reload failed: %s", exc)
        return jsonify({"error": f"reload failed: {exc}"}), 500

    return jsonify(
        {
            "status": "reloaded",
            "totalProducts": len(snapshot.products),
            "skipped": len(snapshot.report.skipped),
            "source": snapshot.metadata.source,
        }
    )

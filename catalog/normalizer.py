"""Normalize raw scraped product records into canonical products.

Every field is resolved through an explicit chain of accessors (see
``catalog.shapes``), highest priority first, ending in a concrete default.
The chains are module-level constants so their precedence can be read and
tested field by field.
"""

import math
import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from catalog.config import (
    DEFAULT_CATEGORY,
    DEFAULT_CURRENCY,
    DEFAULT_DESCRIPTION_HTML,
    DEFAULT_DIMENSIONS,
    DEFAULT_EFFICIENCY,
    DEFAULT_FEATURES_HTML,
    DEFAULT_IMAGE_ALT,
    DEFAULT_MOUNTING,
    DEFAULT_STOCK,
    DEFAULT_WARRANTY,
)
from catalog.errors import UnnormalizableRecord
from catalog.html_utils import looks_like_html, strip_tags, wrap_list, wrap_paragraph
from catalog.logging_config import get_logger
from catalog.models import (
    BuildReport,
    CanonicalProduct,
    ProductImage,
    ProductVariant,
    RawProductRecord,
    RichText,
    Specifications,
)
from catalog.shapes import (
    Accessor,
    RawShape,
    classify,
    component,
    dig,
    first_of,
    flat,
    is_missing,
    mapped,
    mapping_or_none,
    top_level,
)

__all__ = [
    "normalize",
    "normalize_all",
    "to_rich_text",
    "to_int",
    "to_float",
    "SPEC_SOURCE_CHAIN",
    "DESCRIPTION_CHAIN",
    "FEATURES_CHAIN",
    "IMAGES_CHAIN",
    "WARRANTY_CHAIN",
    "COVERAGE_CHAIN",
    "EFFICIENCY_CHAIN",
]

logger = get_logger(__name__)

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")
_SLUG_RE = re.compile(r"[^a-z0-9]+")


# ---------- VALUE COERCION ----------


def to_float(value: Any) -> Optional[float]:
    """Parse a number from ints, floats or strings like '£1,299.00' / '8.5 kg'."""
    if isinstance(value, bool):
        return None
    number = None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        m = _NUMBER_RE.search(value.replace(",", ""))
        if m:
            number = float(m.group())
    # json.loads accepts Infinity and NaN, neither is a usable quantity
    if number is None or not math.isfinite(number):
        return None
    return number


def to_int(value: Any) -> Optional[int]:
    """Parse an integer, e.g. ``'600W'`` -> 600."""
    number = to_float(value)
    return None if number is None else int(number)


def _slugify(text: str) -> str:
    return _SLUG_RE.sub("-", text.lower()).strip("-")


def _text(value: Any) -> Optional[str]:
    if is_missing(value):
        return None
    return str(value).strip()


def to_rich_text(value: Any, as_list: bool = False) -> Optional[RichText]:
    """Convert a raw content value to RichText.

    Accepts a ``{html, plainText}`` mapping, an HTML or plain string, or (for
    feature bullets) a list of strings. ``plainText`` is derived from the HTML
    when the record doesn't carry one.
    """
    if isinstance(value, dict):
        html = _text(value.get("html"))
        plain = _text(value.get("plainText"))
        if html is None and plain is None:
            return None
        if html is None:
            html = wrap_paragraph(plain)
        return RichText(html=html, plain_text=plain if plain is not None else strip_tags(html))
    if isinstance(value, (list, tuple)):
        items = [str(item) for item in value if not is_missing(item)]
        if not items:
            return None
        html = wrap_list(items)
        return RichText(html=html, plain_text=strip_tags(html))
    text = _text(value)
    if text is None:
        return None
    if as_list and not looks_like_html(text):
        html = wrap_list([text])
    else:
        html = wrap_paragraph(text)
    return RichText(html=html, plain_text=strip_tags(html))


# ---------- FALLBACK CHAINS ----------

SPEC_SOURCE_CHAIN: Tuple[Accessor, ...] = (
    mapped(component("specifications", "chunks", 0), mapping_or_none),
    mapped(flat("specifications", "basic"), mapping_or_none),
)

DESCRIPTION_CHAIN: Tuple[Accessor, ...] = (
    mapped(component("description", "content"), to_rich_text),
    mapped(flat("information", "description"), to_rich_text),
)

FEATURES_CHAIN: Tuple[Accessor, ...] = (
    mapped(component("features", "content"), lambda v: to_rich_text(v, as_list=True)),
    mapped(flat("information", "features"), lambda v: to_rich_text(v, as_list=True)),
)

IMAGES_CHAIN: Tuple[Accessor, ...] = (
    mapped(component("productImages", "images"), lambda v: v if isinstance(v, list) else None),
    mapped(flat("media", "images"), lambda v: v if isinstance(v, list) else None),
)

WARRANTY_CHAIN: Tuple[Accessor, ...] = (
    component("warranty", "text"),
    flat("information", "warranty"),
)

COVERAGE_CHAIN: Tuple[Accessor, ...] = (
    component("specifications", "chunks", 0, "coverage"),
    flat("specifications", "coverage"),
    flat("specifications", "basic", "coverage"),
)

EFFICIENCY_CHAIN: Tuple[Accessor, ...] = (
    component("specifications", "chunks", 0, "efficiency"),
    flat("specifications", "efficiency"),
    flat("specifications", "basic", "efficiency"),
)

SOURCE_URL_CHAIN = (top_level("sourceUrl"), top_level("url"))
EXTRACTED_AT_CHAIN = (top_level("extractedAt"), top_level("scrapedAt"))

# Variant-level chains run against the variant mapping, not the product record.
VARIANT_PRICE_CHAIN: Tuple[Accessor, ...] = (
    top_level("price"),
    Accessor(RawShape.ANY, lambda v: dig(v, "priceVariants", 0, "price"), "priceVariants[0].price"),
)

VARIANT_CURRENCY_CHAIN: Tuple[Accessor, ...] = (
    Accessor(RawShape.ANY, lambda v: dig(v, "priceVariants", 0, "currency"), "priceVariants[0].currency"),
    top_level("currency"),
)

_BASE_PRICE = Accessor(RawShape.ANY, lambda raw: dig(raw, "pricing", "basePrice"), "pricing.basePrice")

_DEFAULT_DESCRIPTION = RichText(DEFAULT_DESCRIPTION_HTML, strip_tags(DEFAULT_DESCRIPTION_HTML))
_DEFAULT_FEATURES = RichText(DEFAULT_FEATURES_HTML, strip_tags(DEFAULT_FEATURES_HTML))


# ---------- FIELD BUILDERS ----------


def _specifications(raw: RawProductRecord, shape: RawShape) -> Specifications:
    source: Dict[str, Any] = first_of(raw, SPEC_SOURCE_CHAIN, default={}, shape=shape)

    wattage = to_int(source.get("wattage"))
    weight = to_float(source.get("weight"))
    coverage = first_of(raw, COVERAGE_CHAIN, shape=shape)
    return Specifications(
        wattage=wattage if wattage is not None else 0,
        dimensions=_text(source.get("dimensions")) or DEFAULT_DIMENSIONS,
        weight=weight if weight is not None else 0.0,
        coverage=str(coverage) if coverage is not None else None,
        mounting=_text(source.get("mounting")) or DEFAULT_MOUNTING,
        efficiency=str(first_of(raw, EFFICIENCY_CHAIN, DEFAULT_EFFICIENCY, shape)),
    )


def _images(raw: RawProductRecord, shape: RawShape) -> Tuple[ProductImage, ...]:
    images: List[ProductImage] = []
    for item in first_of(raw, IMAGES_CHAIN, default=[], shape=shape):
        if isinstance(item, str):
            url, alt = item, None
        elif isinstance(item, dict):
            url = item.get("url")
            alt = item.get("altText") if not is_missing(item.get("altText")) else item.get("alt")
        else:
            continue
        if is_missing(url):
            continue
        images.append(ProductImage(url=str(url), alt_text=_text(alt) or DEFAULT_IMAGE_ALT))
    return tuple(images)


def _is_flagged(value: Any) -> bool:
    """Only a real true or the string 'true' marks a default variant."""
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


def _default_index(raw_variants: List[Dict[str, Any]]) -> int:
    for index, variant in enumerate(raw_variants):
        if _is_flagged(variant.get("isDefault")):
            return index
    return 0


def _variants(
    raw: RawProductRecord, product_id: str, product_name: str
) -> Tuple[ProductVariant, ...]:
    raw_variants = [v for v in raw.get("variants") or [] if isinstance(v, dict)]
    if not raw_variants:
        raise UnnormalizableRecord(product_id, "record has no variants")

    default_index = _default_index(raw_variants)
    variants = []
    for index, variant in enumerate(raw_variants):
        price_value = to_float(first_of(variant, VARIANT_PRICE_CHAIN))
        if price_value is None:
            price_value = to_float(first_of(raw, (_BASE_PRICE,)))
        currency = first_of(variant, VARIANT_CURRENCY_CHAIN, DEFAULT_CURRENCY)
        stock = to_int(variant.get("stock"))
        variants.append(
            ProductVariant(
                id=_text(variant.get("id")) or f"{product_id}-variant-{index}",
                name=_text(variant.get("name")) or product_name,
                sku=_text(variant.get("sku")) or f"{product_id}-{index}",
                price=price_value if price_value is not None else 0.0,
                currency=str(currency).upper(),
                stock=stock if stock is not None else DEFAULT_STOCK,
                is_default=index == default_index,
            )
        )
    return tuple(variants)


# ---------- PUBLIC API ----------


def normalize(raw: RawProductRecord) -> CanonicalProduct:
    """Convert one raw record into a CanonicalProduct.

    Pure: the same record always yields an equal product and the record is
    not modified.

    Args:
        raw: Raw product record in component, flat or mixed layout.

    Returns:
        The canonical product.

    Raises:
        UnnormalizableRecord: The record is not a mapping, has no name, or has
            no variants. No placeholder product or variant is invented.
    """
    if not isinstance(raw, dict):
        raise UnnormalizableRecord("<unknown>", f"expected an object, got {type(raw).__name__}")

    name = _text(raw.get("name"))
    product_id = _text(raw.get("id")) or (_slugify(name) if name else None)
    if name is None:
        raise UnnormalizableRecord(product_id or "<unknown>", "record has no name")

    shape = classify(raw)
    variants = _variants(raw, product_id, name)
    default_variant = next(v for v in variants if v.is_default)

    source_url = first_of(raw, SOURCE_URL_CHAIN, shape=shape)
    extracted_at = first_of(raw, EXTRACTED_AT_CHAIN, shape=shape)

    return CanonicalProduct(
        id=product_id,
        name=name,
        path=_text(raw.get("path")) or f"/{product_id}",
        category=_text(raw.get("category")) or DEFAULT_CATEGORY,
        description=first_of(raw, DESCRIPTION_CHAIN, _DEFAULT_DESCRIPTION, shape),
        specifications=_specifications(raw, shape),
        features=first_of(raw, FEATURES_CHAIN, _DEFAULT_FEATURES, shape),
        images=_images(raw, shape),
        variants=variants,
        price=default_variant.price,
        currency=default_variant.currency,
        warranty=str(first_of(raw, WARRANTY_CHAIN, DEFAULT_WARRANTY, shape)).strip(),
        source_url=str(source_url) if source_url is not None else None,
        extracted_at=str(extracted_at) if extracted_at is not None else None,
    )


def normalize_all(records: Iterable[RawProductRecord]) -> Tuple[List[CanonicalProduct], BuildReport]:
    """Normalize a record set, skipping records that can't become products.

    Products keep the ingestion order. When two records share an id the
    first one wins.
    """
    products: List[CanonicalProduct] = []
    skipped: List[str] = []
    seen_ids = set()

    for position, raw in enumerate(records):
        try:
            product = normalize(raw)
        except UnnormalizableRecord as exc:
            logger.warning("Skipping record #%d (%s): %s", position, exc.record_id, exc.reason)
            skipped.append(exc.record_id)
            continue
        if product.id in seen_ids:
            logger.warning("Skipping record #%d: duplicate id %s", position, product.id)
            skipped.append(product.id)
            continue
        seen_ids.add(product.id)
        products.append(product)

    return products, BuildReport(normalized=len(products), skipped=tuple(skipped))

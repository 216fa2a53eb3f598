"""Command-line interface for inspecting the catalog."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

# Add parent directory to path to allow imports when run as script
sys.path.insert(0, str(Path(__file__).parent.parent))

__all__ = ["main", "parse_args", "build_engine", "show_stats", "export_csv"]

from catalog.config import DEFAULT_LIMIT, FALLBACK_DATA_PATH, PRIMARY_DATA_PATH
from catalog.index import CatalogIndex
from catalog.loader import load
from catalog.logging_config import setup_logging
from catalog.models import CanonicalProduct, ProductFilter
from catalog.query import QueryEngine


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Query the normalized heater product catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show catalog statistics
  python -m catalog.cli --stats

  # Panel heaters between 200 and 500 GBP
  python -m catalog.cli --category panel --min-price 200 --max-price 500

  # Search and print full JSON
  python -m catalog.cli --search mirror --json

  # Export the normalized catalog to CSV
  python -m catalog.cli --export-csv data/catalog.csv
        """,
    )

    # Data sources
    parser.add_argument(
        "--primary",
        default=PRIMARY_DATA_PATH,
        help=f"Primary JSON data file (default: {PRIMARY_DATA_PATH})",
    )
    parser.add_argument(
        "--fallback",
        default=FALLBACK_DATA_PATH,
        help=f"Fallback JSON data file (default: {FALLBACK_DATA_PATH})",
    )

    # Info commands
    parser.add_argument("--stats", action="store_true", help="Show catalog statistics and exit")
    parser.add_argument("--list-categories", action="store_true", help="List categories and exit")
    parser.add_argument("--show", metavar="ID", help="Show one product by id")
    parser.add_argument("--search", metavar="QUERY", help="Search name, description and category")
    parser.add_argument("--export-csv", metavar="PATH", help="Export normalized products to CSV")

    # Filters for listing
    parser.add_argument("--category", help="Category substring (case-insensitive)")
    parser.add_argument("--min-price", type=float)
    parser.add_argument("--max-price", type=float)
    parser.add_argument("--min-wattage", type=int)
    parser.add_argument("--max-wattage", type=int)
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_LIMIT,
        help=f"Maximum products to list (default: {DEFAULT_LIMIT})",
    )

    parser.add_argument("--json", action="store_true", help="Print products as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    return parser.parse_args(argv)


def build_engine(primary: str, fallback: str) -> QueryEngine:
    index = CatalogIndex(loader=lambda: load(primary, fallback)).init()
    return QueryEngine(index)


def _print_products(products: List[CanonicalProduct], as_json: bool) -> None:
    if as_json:
        print(json.dumps([p.to_dict() for p in products], indent=2, ensure_ascii=False))
        return
    if not products:
        print("No matching products")
        return
    for p in products:
        print(
            f"  {p.id}: {p.name} [{p.category}] "
            f"{p.specifications.wattage}W - {p.price:.2f} {p.currency}"
        )


def show_stats(engine: QueryEngine) -> None:
    """Display catalog statistics."""
    meta = engine.metadata()
    report = engine.index.snapshot.report

    print(f"\n{'='*50}")
    print(f"Source: {meta['source']} (scraped {meta['scrapedAt']})")
    print(f"{'='*50}")
    print(f"\nTotal products: {meta['totalProducts']}")
    if report.skipped:
        print(f"Skipped records: {len(report.skipped)} ({', '.join(report.skipped)})")

    print("\nProducts by category:")
    for category in meta["categories"]:
        print(f"  {category}: {len(engine.by_category(category))}")
    print()


def export_csv(engine: QueryEngine, path: str) -> int:
    """Write one row per product, nested fields flattened with dots."""
    products = list(engine.index.snapshot.products)
    rows = []
    for p in products:
        row = p.to_dict()
        row["images"] = len(row["images"])
        row["variants"] = len(row["variants"])
        rows.append(row)
    df = pd.json_normalize(rows)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return len(df)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for CLI."""
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING, log_to_file=False)

    engine = build_engine(args.primary, args.fallback)

    if args.stats:
        show_stats(engine)
        return

    if args.list_categories:
        for category in engine.list_categories():
            print(category)
        return

    if args.export_csv:
        count = export_csv(engine, args.export_csv)
        print(f"Exported {count} products to {args.export_csv}")
        return

    if args.show:
        product = engine.get_by_id(args.show)
        if product is None:
            print(f"No product with id {args.show}")
            sys.exit(1)
        print(json.dumps(product.to_dict(), indent=2, ensure_ascii=False))
        return

    if args.search:
        _print_products(engine.search(args.search)[: args.limit], args.json)
        return

    product_filter = ProductFilter(
        category=args.category,
        min_price=args.min_price,
        max_price=args.max_price,
        min_wattage=args.min_wattage,
        max_wattage=args.max_wattage,
    )
    _print_products(engine.list(args.limit, product_filter), args.json)


if __name__ == "__main__":
    main()

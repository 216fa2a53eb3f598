"""Tests for the catalog command-line interface."""

import json
import logging

import pandas as pd
import pytest

from catalog.cli import main, parse_args


@pytest.fixture
def data_files(write_json, component_record, flat_record, missing_path):
    primary = write_json("primary.json", {"products": [component_record, flat_record]})
    return ["--primary", str(primary), "--fallback", str(missing_path)]


@pytest.fixture(autouse=True)
def no_remote(monkeypatch):
    monkeypatch.setattr("catalog.loader.REMOTE_DATA_URL", "")


@pytest.fixture(autouse=True)
def reset_logging():
    """main() installs console handlers on the catalog logger; drop them afterwards."""
    yield
    logger = logging.getLogger("catalog")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_parse_args_defaults():
    args = parse_args([])
    assert args.limit == 20
    assert args.category is None
    assert not args.stats


def test_list_with_filters(data_files, capsys):
    main(data_files + ["--category", "panel", "--max-price", "300"])
    out = capsys.readouterr().out
    assert "norko-panel-600" in out
    assert "norko-mirror-900" not in out
    assert "600W - 299.99 GBP" in out


def test_search_json(data_files, capsys):
    main(data_files + ["--search", "mirror", "--json"])
    products = json.loads(capsys.readouterr().out)
    assert [p["id"] for p in products] == ["norko-mirror-900"]
    assert products[0]["specifications"]["mounting"] == "Wall mounted"


def test_show_missing_product_exits(data_files, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(data_files + ["--show", "nope"])
    assert exc_info.value.code == 1


def test_stats(data_files, capsys):
    main(data_files + ["--stats"])
    out = capsys.readouterr().out
    assert "Total products: 2" in out
    assert "Mirror Heaters: 1" in out


def test_list_categories(data_files, capsys):
    main(data_files + ["--list-categories"])
    assert capsys.readouterr().out.split() == ["Mirror", "Heaters", "Panel", "Heaters"]


def test_export_csv(data_files, tmp_path, capsys):
    out_path = tmp_path / "export" / "catalog.csv"
    main(data_files + ["--export-csv", str(out_path)])

    df = pd.read_csv(out_path)
    assert len(df) == 2
    assert list(df["id"]) == ["norko-panel-600", "norko-mirror-900"]
    assert list(df["specifications.wattage"]) == [600, 900]
    assert "Exported 2 products" in capsys.readouterr().out

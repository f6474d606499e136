"""Tests for stock_viewer.catalog."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from stock_viewer.catalog import CatalogStore, load_catalog
from stock_viewer.core.config import CatalogConfig
from stock_viewer.core.exceptions import CatalogLoadError
from stock_viewer.core.models import TickerRecord


@pytest.fixture
def store(catalog_csv: Path) -> CatalogStore:
    return CatalogStore.load(catalog_csv)


@pytest.mark.unit
class TestLoad:
    def test_loads_all_rows(self, store):
        assert len(store) == 10
        assert TickerRecord(symbol="AAPL", name="Apple Inc.") in list(store)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogLoadError) as exc_info:
            CatalogStore.load(tmp_path / "nope.csv")
        assert exc_info.value.context["path"].endswith("nope.csv")

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("code,description\nAAPL,Apple\n")
        with pytest.raises(CatalogLoadError, match="Cannot find ticker/name columns"):
            CatalogStore.load(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("")
        with pytest.raises(CatalogLoadError):
            CatalogStore.load(path)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.csv"
        path.write_bytes(b"Ticker,Name\n\xff\xfe\xfa,\x80\x81\n")
        with pytest.raises(CatalogLoadError):
            CatalogStore.load(path)

    def test_column_aliases_and_bom(self, tmp_path):
        path = tmp_path / "alias.csv"
        path.write_text("\ufeffsymbol,company\n IBM , International Business Machines \n", encoding="utf-8")
        store = CatalogStore.load(path)
        assert list(store) == [
            TickerRecord(symbol="IBM", name="International Business Machines")
        ]

    def test_blank_symbols_skipped(self, tmp_path):
        path = tmp_path / "blanks.csv"
        path.write_text("Ticker,Name\n,Nameless Corp\nKO,The Coca-Cola Company\n")
        store = CatalogStore.load(path)
        assert [r.symbol for r in store] == ["KO"]

    def test_load_logs_count(self, catalog_csv, caplog):
        with caplog.at_level(logging.INFO, logger="stock_viewer.catalog.store"):
            CatalogStore.load(catalog_csv)
        assert "Loaded 10 stocks" in caplog.text

    def test_empty_store(self):
        store = CatalogStore.empty()
        assert len(store) == 0
        assert store.search("a") == []


@pytest.mark.unit
class TestSearch:
    def test_empty_query_returns_nothing(self, store):
        assert store.search("") == []

    def test_blank_query_returns_nothing(self, store):
        assert store.search("   ") == []

    def test_none_query_returns_nothing(self, store):
        assert store.search(None) == []

    def test_case_insensitive_symbol_match(self, store):
        results = store.search("msft")
        assert [r.symbol for r in results] == ["MSFT"]

    def test_matches_name(self, store):
        results = store.search("alphabet")
        assert {r.symbol for r in results} == {"GOOGL", "GOOG"}

    def test_sorted_by_name(self, store):
        results = store.search("alphabet")
        assert [r.name for r in results] == ["Alphabet Inc. Class A", "Alphabet Inc. Class C"]

    def test_default_limit_is_five(self, store):
        # six catalog entries contain "ap"
        results = store.search("ap")
        assert len(results) == 5
        names = [r.name for r in results]
        assert names == sorted(names)

    def test_non_positive_limit_coerced_to_default(self, store):
        assert len(store.search("ap", limit=0)) == 5
        assert len(store.search("ap", limit=-3)) == 5

    def test_aapl_with_zero_limit(self, store):
        results = store.search("aapl", limit=0)
        assert 1 <= len(results) <= 5
        assert results[0].symbol == "AAPL"

    def test_explicit_limit(self, store):
        assert len(store.search("ap", limit=2)) == 2

    def test_name_order_ignores_case(self, tmp_path):
        path = tmp_path / "mixed.csv"
        path.write_text("Ticker,Name\nZBRA,Zebra Technologies\nAPLX,apple X Holdings\nABC,Acme Corp\n")
        results = CatalogStore.load(path).search("e")
        assert [r.symbol for r in results] == ["ABC", "APLX", "ZBRA"]

    def test_truncation_happens_after_sort(self, store):
        results = store.search("appl", limit=1)
        # Apple Hospitality, Apple Inc., Applied Digital, Applied Materials, Pineapple
        assert results[0].name == "Apple Hospitality REIT Inc."

    def test_no_match(self, store):
        assert store.search("zzz") == []

    def test_search_does_not_mutate(self, store):
        before = list(store)
        store.search("a", limit=1)
        assert list(store) == before

    def test_search_logs_result_count(self, store, caplog):
        with caplog.at_level(logging.INFO, logger="stock_viewer.catalog.store"):
            store.search("msft")
        assert "results found: 1" in caplog.text


@pytest.mark.unit
class TestLoadCatalog:
    def test_loads_configured_path(self, catalog_csv):
        store = load_catalog(CatalogConfig(path=str(catalog_csv)))
        assert len(store) == 10

    def test_degrades_to_empty_when_optional(self, tmp_path, caplog):
        config = CatalogConfig(path=str(tmp_path / "missing.csv"), required=False)
        with caplog.at_level(logging.ERROR, logger="stock_viewer.catalog"):
            store = load_catalog(config)
        assert len(store) == 0
        assert "continuing with empty catalog" in caplog.text

    def test_raises_when_required(self, tmp_path):
        config = CatalogConfig(path=str(tmp_path / "missing.csv"), required=True)
        with pytest.raises(CatalogLoadError):
            load_catalog(config)

"""Shared pytest fixtures for stock-viewer."""

from datetime import date
from pathlib import Path

import pytest

from stock_viewer.core.config import (
    AlphaVantageConfig,
    CatalogConfig,
    ViewerConfig,
)
from stock_viewer.core.models import DateRange, TickerRecord

BASE_URL = "https://av.test"


def _entry(o, h, lo, c, v):
    return {"1. open": o, "2. high": h, "3. low": lo, "4. close": c, "5. volume": v}


@pytest.fixture
def daily_payload() -> dict:
    """Recorded-shape TIME_SERIES_DAILY response for IBM."""
    return {
        "Meta Data": {
            "1. Information": "Daily Prices (open, high, low, close) and Volumes",
            "2. Symbol": "IBM",
            "3. Last Refreshed": "2024-02-20",
            "4. Output Size": "Compact",
            "5. Time Zone": "US/Eastern",
        },
        "Time Series (Daily)": {
            "2024-02-20": _entry("187.6400", "188.7700", "183.0600", "186.0200", "5150212"),
            "2024-02-16": _entry("186.6300", "188.9500", "185.9452", "187.6400", "4842840"),
            "2024-02-15": _entry("183.6200", "186.9800", "183.6200", "186.8700", "4714301"),
            "2024-01-31": _entry("187.0500", "187.6500", "183.1400", "183.6600", "8876055"),
            "2024-01-02": _entry("162.8300", "163.2900", "160.9300", "161.8600", "4086122"),
            "2023-12-29": _entry("162.9100", "163.4300", "162.0500", "163.5500", "3293538"),
        },
    }


@pytest.fixture
def weekly_payload() -> dict:
    return {
        "Meta Data": {"2. Symbol": "IBM"},
        "Weekly Time Series": {
            "2023-12-29": _entry("162.0000", "164.0000", "161.0000", "163.5500", "15000000"),
            "2021-01-08": _entry("123.0000", "130.0000", "121.0000", "128.5300", "28000000"),
            "2019-12-27": _entry("135.0000", "136.0000", "134.0000", "135.1000", "9000000"),
        },
    }


@pytest.fixture
def january_2024() -> DateRange:
    return DateRange(start=date(2024, 1, 1), end=date(2024, 2, 15))


@pytest.fixture
def catalog_csv(tmp_path: Path) -> Path:
    path = tmp_path / "stock_info.csv"
    path.write_text(
        "Ticker,Name\n"
        "AAPL,Apple Inc.\n"
        "MSFT,Microsoft Corporation\n"
        "GOOGL,Alphabet Inc. Class A\n"
        "GOOG,Alphabet Inc. Class C\n"
        "AMZN,Amazon.com Inc.\n"
        "APLE,Apple Hospitality REIT Inc.\n"
        "APLD,Applied Digital Corporation\n"
        "AMAT,Applied Materials Inc.\n"
        "PAPL,Pineapple Energy Inc.\n"
        "MAPL,Maple Leaf Foods\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def sample_records() -> list[TickerRecord]:
    return [
        TickerRecord(symbol="AAPL", name="Apple Inc."),
        TickerRecord(symbol="MSFT", name="Microsoft Corporation"),
        TickerRecord(symbol="GOOGL", name="Alphabet Inc. Class A"),
    ]


@pytest.fixture
def viewer_config(catalog_csv: Path) -> ViewerConfig:
    return ViewerConfig(
        alpha_vantage=AlphaVantageConfig(api_key="test-key", base_url=BASE_URL, request_timeout=5),
        catalog=CatalogConfig(path=str(catalog_csv)),
    )

"""Pydantic data models shared by the planner, normalizer, catalog and API."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# --- Type Aliases ---

Ticker = str

# --- Enumerations ---


class Granularity(StrEnum):
    """Reporting interval requested from the upstream API."""

    DAILY_COMPACT = "daily_compact"
    DAILY_FULL = "daily_full"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @property
    def function(self) -> str:
        """Upstream ``function`` query parameter for this granularity."""
        return _FUNCTIONS[self]

    @property
    def series_key(self) -> str:
        """Name of the time-series container in the upstream payload."""
        return _SERIES_KEYS[self]


_FUNCTIONS: dict[Granularity, str] = {
    Granularity.DAILY_COMPACT: "TIME_SERIES_DAILY",
    Granularity.DAILY_FULL: "TIME_SERIES_DAILY",
    Granularity.WEEKLY: "TIME_SERIES_WEEKLY",
    Granularity.MONTHLY: "TIME_SERIES_MONTHLY",
}

_SERIES_KEYS: dict[Granularity, str] = {
    Granularity.DAILY_COMPACT: "Time Series (Daily)",
    Granularity.DAILY_FULL: "Time Series (Daily)",
    Granularity.WEEKLY: "Weekly Time Series",
    Granularity.MONTHLY: "Monthly Time Series",
}


# --- Catalog Models ---


class TickerRecord(BaseModel):
    """A single ticker/name pair from the static catalog."""

    model_config = ConfigDict(frozen=True)

    symbol: Ticker
    name: str

    @field_validator("symbol")
    @classmethod
    def symbol_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("symbol must not be blank")
        return v

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


# --- Query Models ---


class DateRange(BaseModel):
    """Inclusive date window for a series request."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @model_validator(mode="after")
    def start_not_after_end(self) -> DateRange:
        if self.start > self.end:
            raise ValueError(f"start ({self.start}) must not be after end ({self.end})")
        return self

    @property
    def days(self) -> int:
        return (self.end - self.start).days

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


class QueryPlan(BaseModel):
    """What to ask the upstream API for a given date range."""

    model_config = ConfigDict(frozen=True)

    granularity: Granularity
    extra_params: dict[str, str] = Field(default_factory=dict)

    @property
    def function(self) -> str:
        return self.granularity.function

    def params(self, symbol: str, api_key: str) -> dict[str, str]:
        """Full upstream query string for this plan."""
        return {
            "function": self.function,
            "symbol": symbol,
            "apikey": api_key,
            **self.extra_params,
        }


# --- Series Models ---


class PricePoint(BaseModel):
    """One trading period of a normalized series.

    Numeric fields are zero when the upstream value was missing or
    unparseable.
    """

    model_config = ConfigDict(frozen=True)

    date: date
    open: Decimal = Decimal(0)
    high: Decimal = Decimal(0)
    low: Decimal = Decimal(0)
    close: Decimal = Decimal(0)
    volume: Decimal = Decimal(0)

    def ohlcv(self) -> dict[str, Decimal]:
        """OHLCV fields without the date, for date-keyed output."""
        return {
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }


NormalizedSeries = list[PricePoint]


def series_to_mapping(series: NormalizedSeries) -> dict[str, dict[str, Decimal]]:
    """Re-key a series by ISO date string, preserving its order."""
    return {point.date.isoformat(): point.ohlcv() for point in series}

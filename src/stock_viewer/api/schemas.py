"""API-specific request/response schemas (Pydantic v2)."""

from __future__ import annotations

from pydantic import BaseModel

from stock_viewer.core.models import NormalizedSeries, series_to_mapping


# -- Error --


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    error: str
    detail: str | None = None


# -- Search --


class TickerResponse(BaseModel):
    """Single catalog match."""

    symbol: str
    name: str


# -- Series --


class PricePointResponse(BaseModel):
    """OHLCV values for one date of a series."""

    open: float
    high: float
    low: float
    close: float
    volume: float


class SeriesResponse(BaseModel):
    """Normalized series keyed by ISO date, newest first."""

    success: bool = True
    data: dict[str, PricePointResponse]

    @classmethod
    def from_series(cls, series: NormalizedSeries) -> SeriesResponse:
        return cls(
            data={
                day: PricePointResponse(**{k: float(v) for k, v in values.items()})
                for day, values in series_to_mapping(series).items()
            }
        )


# -- Health --


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    status: str = "ok"
    version: str
    catalog_size: int

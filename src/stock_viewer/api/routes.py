"""FastAPI route definitions for the stock-viewer API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

import stock_viewer
from stock_viewer.api.deps import get_catalog, get_config, get_market
from stock_viewer.api.schemas import HealthResponse, SeriesResponse, TickerResponse
from stock_viewer.catalog import CatalogStore
from stock_viewer.core.config import ViewerConfig
from stock_viewer.core.exceptions import InvalidRequestError
from stock_viewer.market import MarketDataService

router = APIRouter()


# -- Health --


@router.get("/health", response_model=HealthResponse)
async def health_check(catalog: CatalogStore = Depends(get_catalog)):
    """Liveness probe with catalog size."""
    return HealthResponse(
        status="ok",
        version=stock_viewer.__version__,
        catalog_size=len(catalog),
    )


# -- Stocks --


@router.get("/stocks/search", response_model=list[TickerResponse])
async def search(
    query: str | None = Query(None, description="Substring of ticker or company name"),
    catalog: CatalogStore = Depends(get_catalog),
    config: ViewerConfig = Depends(get_config),
):
    """Search the ticker catalog by symbol or name."""
    if query is None or not query.strip():
        raise InvalidRequestError(
            "Query parameter is required.",
            context={"field": "query", "value": query},
        )

    results = catalog.search(query, limit=config.catalog.default_limit)
    return [TickerResponse(symbol=r.symbol, name=r.name) for r in results]


@router.get("/stocks/get_data", response_model=SeriesResponse)
async def get_data(
    symbol: str | None = Query(None, description="Ticker symbol"),
    start: str | None = Query(None, description="Start date, yyyy-MM-dd"),
    end: str | None = Query(None, description="End date, yyyy-MM-dd"),
    market: MarketDataService = Depends(get_market),
):
    """Date-filtered OHLCV series for a symbol, newest first."""
    series = await market.get_data(symbol, start, end)
    return SeriesResponse.from_series(series)

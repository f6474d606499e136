"""Request orchestration for ``get_data``: validate, plan, fetch, normalize."""

from __future__ import annotations

import logging

from stock_viewer.core.exceptions import InvalidRequestError, UnexpectedShapeError
from stock_viewer.core.models import DateRange, NormalizedSeries
from stock_viewer.market.client import AlphaVantageClient
from stock_viewer.market.normalizer import normalize, parse_entry_date
from stock_viewer.market.planner import plan_range

logger = logging.getLogger(__name__)


def require_params(**params: str | None) -> dict[str, str]:
    """Reject missing or blank parameters, returning them stripped."""
    missing = [name for name, value in params.items() if value is None or not value.strip()]
    if missing:
        raise InvalidRequestError(
            "Symbol, start date, and end date are required.",
            context={"field": ",".join(missing)},
        )
    return {name: value.strip() for name, value in params.items()}  # type: ignore[union-attr]


def parse_date_range(start: str, end: str) -> DateRange:
    """Parse a start/end pair of date strings into a validated DateRange."""
    start_date = parse_entry_date(start)
    end_date = parse_entry_date(end)
    if start_date is None or end_date is None:
        field, value = ("start", start) if start_date is None else ("end", end)
        raise InvalidRequestError(
            "Invalid date format. Please use yyyy-MM-dd format.",
            context={"field": field, "value": value},
        )
    if start_date > end_date:
        raise InvalidRequestError(
            "Start date must be before end date.",
            context={"field": "start", "value": start},
        )
    return DateRange(start=start_date, end=end_date)


class MarketDataService:
    """Serves normalized series for a symbol and date range.

    Stateless apart from the shared upstream client; safe to call
    concurrently.
    """

    def __init__(self, client: AlphaVantageClient) -> None:
        self._client = client

    async def get_series(self, symbol: str, date_range: DateRange) -> NormalizedSeries:
        query_plan = plan_range(date_range)
        logger.info(
            "Requesting Alpha Vantage data: function=%s symbol=%s range=%s..%s",
            query_plan.function,
            symbol,
            date_range.start,
            date_range.end,
        )
        raw = await self._client.fetch(symbol, query_plan)
        try:
            return normalize(raw, date_range, query_plan.granularity)
        except UnexpectedShapeError as e:
            e.context.setdefault("symbol", symbol)
            raise

    async def get_data(
        self,
        symbol: str | None,
        start: str | None,
        end: str | None,
    ) -> NormalizedSeries:
        """Validate raw request parameters, then fetch and normalize.

        Every validation failure is raised before the upstream is called.
        """
        params = require_params(symbol=symbol, start=start, end=end)
        date_range = parse_date_range(params["start"], params["end"])
        return await self.get_series(params["symbol"], date_range)

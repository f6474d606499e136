"""Alpha Vantage time-series access.

Architecture
------------
Deciding what to ask for is kept apart from interpreting what came back:

    DateRange → plan() → QueryPlan → AlphaVantageClient → raw bytes
              → normalize() → NormalizedSeries

- ``plan``: pure mapping from a date range to granularity + extra params.
- ``AlphaVantageClient``: the only I/O; one GET per request.
- ``normalize``: pure interpretation of the upstream payload.
- ``MarketDataService``: validates request parameters and wires the three.
"""

from stock_viewer.market.client import AlphaVantageClient
from stock_viewer.market.normalizer import normalize, parse_decimal
from stock_viewer.market.planner import plan, plan_range, select_granularity
from stock_viewer.market.service import MarketDataService, parse_date_range, require_params

__all__ = [
    "AlphaVantageClient",
    "MarketDataService",
    "normalize",
    "parse_date_range",
    "parse_decimal",
    "plan",
    "plan_range",
    "require_params",
    "select_granularity",
]

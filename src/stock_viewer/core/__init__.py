"""stock_viewer.core: foundation types, config, and exceptions."""

from stock_viewer.core.config import (
    AlphaVantageConfig,
    APIConfig,
    CatalogConfig,
    LoggingConfig,
    ViewerConfig,
    configure_logging,
    load_config,
)
from stock_viewer.core.exceptions import (
    CatalogLoadError,
    ConfigError,
    InvalidRequestError,
    MalformedPayloadError,
    NormalizeError,
    RateLimitError,
    StockViewerError,
    UnexpectedShapeError,
    UpstreamDomainError,
    UpstreamError,
    UpstreamTransportError,
)
from stock_viewer.core.models import (
    DateRange,
    Granularity,
    NormalizedSeries,
    PricePoint,
    QueryPlan,
    Ticker,
    TickerRecord,
    series_to_mapping,
)

__all__ = [
    # Type aliases
    "Ticker",
    "NormalizedSeries",
    # Enums
    "Granularity",
    # Models
    "TickerRecord",
    "DateRange",
    "QueryPlan",
    "PricePoint",
    "series_to_mapping",
    # Config
    "ViewerConfig",
    "AlphaVantageConfig",
    "CatalogConfig",
    "APIConfig",
    "LoggingConfig",
    "configure_logging",
    "load_config",
    # Exceptions
    "StockViewerError",
    "ConfigError",
    "CatalogLoadError",
    "InvalidRequestError",
    "UpstreamError",
    "UpstreamTransportError",
    "NormalizeError",
    "MalformedPayloadError",
    "UnexpectedShapeError",
    "UpstreamDomainError",
    "RateLimitError",
]

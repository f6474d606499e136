"""stock-viewer: Alpha Vantage time-series proxy and ticker search backend."""

__version__ = "0.1.0"

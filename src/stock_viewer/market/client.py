"""Async HTTP client for the Alpha Vantage ``/query`` endpoint."""

from __future__ import annotations

import logging

import httpx

from stock_viewer.core.config import AlphaVantageConfig
from stock_viewer.core.exceptions import UpstreamTransportError
from stock_viewer.core.models import QueryPlan

logger = logging.getLogger(__name__)

_QUERY_PATH = "/query"
_USER_AGENT = "stock-viewer/0.1"


class AlphaVantageClient:
    """Issues one upstream GET per plan and returns the raw body.

    Owns a single ``httpx.AsyncClient``. Use via
    ``async with AlphaVantageClient(...) as client:`` or call ``close()``.

    Parameters
    ----------
    config : AlphaVantageConfig
        API key, base URL and request timeout.
    transport : httpx.AsyncBaseTransport | None
        Optional transport override (tests).
    """

    def __init__(
        self,
        config: AlphaVantageConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={"User-Agent": _USER_AGENT},
            timeout=httpx.Timeout(config.request_timeout),
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> AlphaVantageClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client. Called automatically by __aexit__."""
        await self._client.aclose()

    async def fetch(self, symbol: str, plan: QueryPlan) -> bytes:
        """Fetch the raw time-series payload for ``symbol``.

        Returns:
            The non-empty response body.

        Raises:
            UpstreamTransportError: Non-2xx status (carrying that status),
                a connection/timeout failure, or an empty body.
        """
        params = plan.params(symbol, self._config.api_key)

        try:
            response = await self._client.get(_QUERY_PATH, params=params)
        except httpx.RequestError as e:
            logger.error("Alpha Vantage request error for %s: %s", symbol, e)
            raise UpstreamTransportError(
                "Failed to fetch data from Alpha Vantage.",
                context={"symbol": symbol, "status_code": None, "error": str(e)},
            ) from e

        if not response.is_success:
            logger.error(
                "Alpha Vantage API request failed: %s %s",
                response.status_code,
                response.text[:200],
            )
            raise UpstreamTransportError(
                "Failed to fetch data from Alpha Vantage.",
                context={"symbol": symbol, "status_code": response.status_code},
            )

        body = response.content
        if not body.strip():
            raise UpstreamTransportError(
                "Empty response received from Alpha Vantage.",
                context={"symbol": symbol, "status_code": 500},
            )

        return body

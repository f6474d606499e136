"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stock_viewer.api.deps import AppState
from stock_viewer.api.routes import router
from stock_viewer.catalog import load_catalog
from stock_viewer.core.config import ViewerConfig, configure_logging, load_config
from stock_viewer.core.exceptions import (
    InvalidRequestError,
    RateLimitError,
    StockViewerError,
    UpstreamDomainError,
    UpstreamTransportError,
)
from stock_viewer.market import AlphaVantageClient, MarketDataService

logger = logging.getLogger(__name__)

# Looked up along the exception's MRO; anything unlisted maps to 500
_STATUS_MAP: dict[type[StockViewerError], int] = {
    InvalidRequestError: 400,
    UpstreamDomainError: 400,
    RateLimitError: 429,
}


def status_for(exc: StockViewerError) -> int:
    """HTTP status code for a classified error."""
    if isinstance(exc, UpstreamTransportError):
        return exc.status_code
    for cls in type(exc).__mro__:
        if cls in _STATUS_MAP:
            return _STATUS_MAP[cls]
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    config: ViewerConfig = app.state._pending_config
    configure_logging(config.logging.level)

    catalog = load_catalog(config.catalog)
    client = AlphaVantageClient(config.alpha_vantage)

    app.state.app_state = AppState(
        config=config,
        catalog=catalog,
        client=client,
        market=MarketDataService(client),
    )

    yield

    await client.close()


def create_app(config: ViewerConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    import stock_viewer

    config = config or load_config()

    app = FastAPI(
        title="Stock Viewer API",
        description="Alpha Vantage time-series proxy and ticker search",
        version=stock_viewer.__version__,
        lifespan=lifespan,
    )

    # Stash config so lifespan reuses what CORS was built from
    app.state._pending_config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.api.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api")

    @app.exception_handler(StockViewerError)
    async def viewer_exception_handler(request: Request, exc: StockViewerError):
        status = status_for(exc)
        if status >= 500:
            logger.error("%s on %s: %s %s", type(exc).__name__, request.url.path, exc, exc.context)
        return JSONResponse(
            status_code=status,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Error processing request %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "InternalServerError",
                "detail": "An internal error occurred while processing your request.",
            },
        )

    return app

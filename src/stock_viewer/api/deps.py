"""Dependency injection for FastAPI routes."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from stock_viewer.catalog import CatalogStore
from stock_viewer.core.config import ViewerConfig
from stock_viewer.market import AlphaVantageClient, MarketDataService


@dataclass
class AppState:
    """Shared application state, attached to app.state during lifespan.

    Everything here is read-only after startup.
    """

    config: ViewerConfig
    catalog: CatalogStore
    client: AlphaVantageClient
    market: MarketDataService


def get_app_state(request: Request) -> AppState:
    """Dependency: retrieve AppState from the request."""
    return request.app.state.app_state


def get_config(request: Request) -> ViewerConfig:
    """Dependency: retrieve config."""
    return request.app.state.app_state.config


def get_catalog(request: Request) -> CatalogStore:
    """Dependency: retrieve the ticker catalog."""
    return request.app.state.app_state.catalog


def get_market(request: Request) -> MarketDataService:
    """Dependency: retrieve the market data service."""
    return request.app.state.app_state.market

"""Static ticker catalog: CSV loading and substring search."""

from __future__ import annotations

import logging

from stock_viewer.catalog.store import DEFAULT_LIMIT, CatalogStore
from stock_viewer.core.config import CatalogConfig
from stock_viewer.core.exceptions import CatalogLoadError

logger = logging.getLogger(__name__)


def load_catalog(config: CatalogConfig) -> CatalogStore:
    """Load the configured catalog, degrading to an empty one unless required."""
    try:
        return CatalogStore.load(config.path)
    except CatalogLoadError as e:
        if config.required:
            raise
        logger.error("Error loading stocks, continuing with empty catalog: %s", e)
        return CatalogStore.empty()


__all__ = [
    "DEFAULT_LIMIT",
    "CatalogStore",
    "load_catalog",
]

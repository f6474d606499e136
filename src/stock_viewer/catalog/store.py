"""Static ticker catalog loaded from CSV.

The catalog is read once at startup and never mutated afterwards, so a
single instance can be shared across concurrent requests without locking.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from pydantic import ValidationError

from stock_viewer.core.exceptions import CatalogLoadError
from stock_viewer.core.models import TickerRecord

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5

# Common column name mappings for auto-detection
_SYMBOL_ALIASES = {"ticker", "Ticker", "TICKER", "symbol", "Symbol", "SYMBOL"}
_NAME_ALIASES = {"name", "Name", "NAME", "company", "Company", "company_name", "Company Name"}


def _find_column(headers: list[str], aliases: set[str]) -> str | None:
    """Find the first header that matches any alias."""
    for h in headers:
        if h.strip() in aliases:
            return h
    return None


class CatalogStore:
    """Immutable in-memory list of ticker records with substring search."""

    def __init__(self, records: Iterable[TickerRecord] = ()) -> None:
        self._records: tuple[TickerRecord, ...] = tuple(records)

    @classmethod
    def empty(cls) -> CatalogStore:
        return cls()

    @classmethod
    def load(cls, source: str | Path) -> CatalogStore:
        """Load the catalog from a CSV file with a header row.

        Rows with a blank symbol are skipped.

        Raises:
            CatalogLoadError: The file is missing, unreadable, or lacks a
                recognizable symbol or name column.
        """
        path = Path(source)
        try:
            with open(path, newline="", encoding="utf-8-sig") as f:
                reader = csv.DictReader(f)
                headers = list(reader.fieldnames or [])
                symbol_col = _find_column(headers, _SYMBOL_ALIASES)
                name_col = _find_column(headers, _NAME_ALIASES)
                if symbol_col is None or name_col is None:
                    raise CatalogLoadError(
                        f"Cannot find ticker/name columns in headers: {headers}",
                        context={"path": str(path), "reason": "missing columns"},
                    )
                records = list(_read_records(reader, symbol_col, name_col))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise CatalogLoadError(
                f"Error loading stocks from {path}: {e}",
                context={"path": str(path), "reason": type(e).__name__},
            ) from e

        logger.info("Loaded %d stocks from %s", len(records), path)
        return cls(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TickerRecord]:
        return iter(self._records)

    def search(self, query: str | None, limit: int = DEFAULT_LIMIT) -> list[TickerRecord]:
        """Case-insensitive substring search over symbol and name.

        A blank query matches nothing. A non-positive ``limit`` falls back to
        the default. Results are ordered by name, then truncated.
        """
        if query is None or not query.strip():
            return []
        if limit <= 0:
            limit = DEFAULT_LIMIT

        needle = query.casefold()
        matches = [
            r
            for r in self._records
            if needle in r.symbol.casefold() or needle in r.name.casefold()
        ]
        matches.sort(key=lambda r: (r.name.casefold(), r.name))
        results = matches[:limit]

        logger.info("Search query: %r, results found: %d", query, len(results))
        return results


def _read_records(
    reader: csv.DictReader, symbol_col: str, name_col: str
) -> Iterator[TickerRecord]:
    for line_no, row in enumerate(reader, start=2):
        symbol = (row.get(symbol_col) or "").strip()
        if not symbol:
            continue
        try:
            yield TickerRecord(symbol=symbol, name=row.get(name_col) or "")
        except ValidationError:
            logger.warning("Skipping catalog row %d: %s", line_no, row)

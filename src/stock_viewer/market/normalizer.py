"""Alpha Vantage response normalization.

Turns a raw ``TIME_SERIES_*`` payload into a date-filtered, date-descending
list of ``PricePoint`` records:

    raw bytes → JSON envelope → error/throttle checks → series container
              → per-date entries in range → PricePoint list

Structural problems (bad JSON, missing container) fail the whole request
with a distinguishable ``NormalizeError``. Per-field numeric problems never
do: an unparseable ``5. volume`` becomes ``0`` and the rest of the entry is
kept.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from stock_viewer.core.exceptions import (
    MalformedPayloadError,
    RateLimitError,
    UnexpectedShapeError,
    UpstreamDomainError,
)
from stock_viewer.core.models import DateRange, Granularity, NormalizedSeries, PricePoint

logger = logging.getLogger(__name__)

ERROR_KEY = "Error Message"
# "Note" is the classic throttling notice; newer responses use "Information"
THROTTLE_KEYS = ("Note", "Information")

_FIELD_KEYS: dict[str, str] = {
    "open": "1. open",
    "high": "2. high",
    "low": "3. low",
    "close": "4. close",
    "volume": "5. volume",
}

_ZERO = Decimal(0)


def parse_decimal(value: Any) -> Decimal:
    """Coerce an upstream field to Decimal, falling back to zero."""
    if value is None or isinstance(value, bool):
        return _ZERO
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return _ZERO
    try:
        result = Decimal(value.strip())
    except InvalidOperation:
        return _ZERO
    return result if result.is_finite() else _ZERO


def parse_entry_date(raw: str) -> date | None:
    """Parse a series key. Accepts plain ISO dates and ISO datetimes."""
    try:
        return date.fromisoformat(raw)
    except (TypeError, ValueError):
        pass
    try:
        return datetime.fromisoformat(raw).date()
    except (TypeError, ValueError):
        return None


def _point_from_entry(day: date, entry: Any) -> PricePoint:
    if not isinstance(entry, dict):
        return PricePoint(date=day)
    return PricePoint(
        date=day,
        **{field: parse_decimal(entry.get(key)) for field, key in _FIELD_KEYS.items()},
    )


def load_payload(raw: bytes | str) -> dict[str, Any]:
    """Decode the upstream body into a JSON object."""
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise MalformedPayloadError(
            "Error processing the response from Alpha Vantage.",
            context={"reason": str(e)},
        ) from e
    if not isinstance(payload, dict):
        raise MalformedPayloadError(
            "Error processing the response from Alpha Vantage.",
            context={"reason": f"top-level JSON is {type(payload).__name__}, not an object"},
        )
    return payload


def check_envelope(payload: dict[str, Any]) -> None:
    """Raise for upstream error and throttling notices."""
    if ERROR_KEY in payload:
        message = str(payload[ERROR_KEY])
        logger.warning("Alpha Vantage API error: %s", message)
        raise UpstreamDomainError(f"API Error: {message}", context={"upstream_message": message})

    for key in THROTTLE_KEYS:
        if key in payload:
            note = str(payload[key])
            logger.warning("Alpha Vantage API rate limit exceeded: %s", note)
            raise RateLimitError(
                "API rate limit exceeded. Please try again later.",
                context={"note": note},
            )


def normalize(
    raw: bytes | str,
    date_range: DateRange,
    granularity: Granularity,
) -> NormalizedSeries:
    """Interpret an upstream payload as a normalized price series.

    Parameters
    ----------
    raw : bytes | str
        Upstream response body.
    date_range : DateRange
        Inclusive window; entries outside it are dropped.
    granularity : Granularity
        Decides which container key holds the series.

    Returns
    -------
    NormalizedSeries
        In-range points sorted by date string descending, one per day.

    Raises
    ------
    MalformedPayloadError
        Body is not a JSON object.
    UpstreamDomainError
        Payload carries an upstream error message.
    RateLimitError
        Payload carries a throttling notice.
    UnexpectedShapeError
        Expected series container is absent.
    """
    payload = load_payload(raw)
    check_envelope(payload)

    series_key = granularity.series_key
    container = payload.get(series_key)
    if not isinstance(container, dict):
        logger.error(
            "Invalid Alpha Vantage response structure, missing %r (keys: %s)",
            series_key,
            sorted(payload),
        )
        raise UnexpectedShapeError(
            "Received invalid data structure from Alpha Vantage.",
            context={"expected_key": series_key, "keys": sorted(payload)},
        )

    entries: list[tuple[str, PricePoint]] = []
    for raw_date, entry in container.items():
        day = parse_entry_date(raw_date)
        if day is None or day not in date_range:
            continue
        entries.append((raw_date, _point_from_entry(day, entry)))

    entries.sort(key=lambda item: item[0], reverse=True)

    # Keys that resolve to the same day: the first in descending key order wins
    seen: set[date] = set()
    series: NormalizedSeries = []
    for raw_date, point in entries:
        if point.date in seen:
            logger.debug("Dropping duplicate entry %r for %s", raw_date, point.date)
            continue
        seen.add(point.date)
        series.append(point)
    return series

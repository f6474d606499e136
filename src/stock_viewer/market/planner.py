"""Upstream query planning: date range -> granularity and extra parameters.

Short ranges ask for the compact daily payload; multi-year ranges fall back
to coarser series so full history stays within a single response. Each
threshold belongs to the cheaper (lower) bucket.
"""

from __future__ import annotations

from datetime import date

from stock_viewer.core.exceptions import InvalidRequestError
from stock_viewer.core.models import DateRange, Granularity, QueryPlan

COMPACT_MAX_DAYS = 100
FULL_DAILY_MAX_DAYS = 365
WEEKLY_MAX_DAYS = 1825


def select_granularity(days: int) -> Granularity:
    """Pick the series granularity for a range spanning ``days`` days."""
    if days <= COMPACT_MAX_DAYS:
        return Granularity.DAILY_COMPACT
    if days <= FULL_DAILY_MAX_DAYS:
        return Granularity.DAILY_FULL
    if days <= WEEKLY_MAX_DAYS:
        return Granularity.WEEKLY
    return Granularity.MONTHLY


_EXTRA_PARAMS: dict[Granularity, dict[str, str]] = {
    Granularity.DAILY_COMPACT: {"outputsize": "compact"},
    Granularity.DAILY_FULL: {"outputsize": "full"},
    Granularity.WEEKLY: {},
    Granularity.MONTHLY: {},
}


def plan(start: date, end: date) -> QueryPlan:
    """Build the upstream query plan for ``[start, end]``.

    Raises:
        InvalidRequestError: If ``start`` is after ``end``.
    """
    if start > end:
        raise InvalidRequestError(
            "Start date must be before end date.",
            context={"field": "start", "value": start.isoformat()},
        )
    granularity = select_granularity((end - start).days)
    return QueryPlan(
        granularity=granularity,
        extra_params=dict(_EXTRA_PARAMS[granularity]),
    )


def plan_range(date_range: DateRange) -> QueryPlan:
    return plan(date_range.start, date_range.end)

"""
Date-range filtering for dated entries (trades, orders, period rows).

Comparisons happen at day granularity: datetimes, pandas timestamps and
ISO-8601 strings are reduced to their calendar day before comparing, so
time-of-day never affects membership.
"""
from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, TypeVar

import pandas as pd

logger = logging.getLogger(__name__)

T = TypeVar("T")

PRESET_LABELS = ("Today", "Yesterday", "Week", "Month", "Quarter", "Year")


def to_day(value: Any) -> dt.date:
    """Reduce a date-like value to a plain ``datetime.date``."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if value is None:
        raise ValueError("Expected a date-like value, got None.")
    return pd.Timestamp(value).date()


def field_of(item: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an attribute-bearing record."""
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def period_start(label: str) -> dt.date:
    """First calendar day of a period label such as ``"2024"`` or ``"2024-05"``."""
    return pd.Period(label).start_time.date()


def filter_by_date_range(
    entries: Sequence[T],
    start: Any,
    end: Any,
    key: Optional[Callable[[T], Any]] = None,
) -> List[T]:
    """
    Keep the entries whose day falls inside ``[start, end]``.

    Args:
        entries: Ordered entries; each exposes a ``date`` unless ``key`` is given.
        start:   Inclusive lower bound (date, datetime or ISO string).
        end:     Inclusive upper bound.
        key:     Optional accessor returning the date-like value of an entry.

    Returns:
        A new list holding the retained entries in their original order.
        An inverted range (``start > end``) yields an empty list.
    """
    lo, hi = to_day(start), to_day(end)
    if lo > hi:
        logger.debug("Inverted date range %s > %s, returning no entries", lo, hi)
        return []

    get_date = key if key is not None else (lambda entry: field_of(entry, "date"))
    return [entry for entry in entries if lo <= to_day(get_date(entry)) <= hi]


def preset_range(label: str, today: Any) -> Tuple[dt.date, dt.date]:
    """
    Resolve an order-history preset to an inclusive ``(start, end)`` range.

    ``Week`` covers the last seven days including ``today``; ``Month``,
    ``Quarter`` and ``Year`` run from the start of the current calendar
    period up to ``today``.
    """
    day = to_day(today)
    if label == "Today":
        return day, day
    if label == "Yesterday":
        yesterday = day - dt.timedelta(days=1)
        return yesterday, yesterday
    if label == "Week":
        return day - dt.timedelta(days=6), day
    if label == "Month":
        return day.replace(day=1), day
    if label == "Quarter":
        first_month = 3 * ((day.month - 1) // 3) + 1
        return dt.date(day.year, first_month, 1), day
    if label == "Year":
        return dt.date(day.year, 1, 1), day
    raise ValueError(f"Unknown range preset {label!r}; expected one of {PRESET_LABELS}.")


def filter_orders(orders: Sequence[T], label: str, today: Any) -> List[T]:
    """Apply a named preset range to an order list."""
    start, end = preset_range(label, today)
    return filter_by_date_range(orders, start, end)

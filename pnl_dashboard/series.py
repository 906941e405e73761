"""
Chart-ready folds over ordered PnL series.

Methodology
-----------
Every fold starts from a single baseline (``initial_capital``, 0 unless the
caller supplies one) and walks the input in the order given:

    equity[i]   = equity[i-1] + pnl[i]          equity[-1]   = baseline
    peak[i]     = max(peak[i-1], equity[i])     peak[-1]     = baseline
    drawdown[i] = max(0, peak[i] - equity[i])

None of these functions reorder their input.  Trade-level series must be
passed through ``sort_trades`` first; period series are folded in the
categorical order the caller provides.
"""
from __future__ import annotations

import logging
from typing import Any, List, Sequence, Tuple

import numpy as np

from pnl_dashboard.filters import field_of, to_day
from pnl_dashboard.models import CumulativePoint, DrawdownPoint, TradeRecord

logger = logging.getLogger(__name__)

_KEY_FIELDS = ("key", "period", "date")


def series_label(item: Any) -> str:
    """Display key of a series element: its ``key``, ``period`` or ISO ``date``."""
    for name in _KEY_FIELDS:
        value = field_of(item, name)
        if value is not None:
            return value.isoformat() if hasattr(value, "isoformat") else str(value)
    raise ValueError(f"Series element has no key, period or date: {item!r}")


def unpack_series(series: Sequence[Any]) -> Tuple[List[str], np.ndarray]:
    """Split an ordered series into its labels and a float64 PnL array."""
    keys = [series_label(item) for item in series]
    pnl = np.array([float(field_of(item, "pnl")) for item in series], dtype=np.float64)
    return keys, pnl


def equity_curve(pnl: np.ndarray, initial_capital: float = 0.0) -> np.ndarray:
    """
    Running equity with the baseline prepended, folded left to right.

    ``curve[0]`` is ``initial_capital`` and ``curve[i + 1]`` is
    ``curve[i] + pnl[i]``, so every addition happens in trade order.
    """
    return np.cumsum(np.concatenate(([float(initial_capital)], np.asarray(pnl, dtype=np.float64))))


def sort_trades(trades: Sequence[TradeRecord]) -> List[TradeRecord]:
    """Return trades ordered by day ascending; trades on the same day keep their order."""
    return sorted(trades, key=lambda trade: to_day(field_of(trade, "date")))


def build_cumulative(series: Sequence[Any], initial_capital: float = 0.0) -> List[CumulativePoint]:
    """
    Fold signed PnL values into a running total.

    Args:
        series:          Ordered elements exposing a key and a ``pnl``.
        initial_capital: Baseline the running total starts from.

    Returns:
        One ``CumulativePoint`` per input element, in input order.
    """
    keys, pnl = unpack_series(series)
    if not keys:
        return []

    cumulative = equity_curve(pnl, initial_capital)[1:]
    return [
        CumulativePoint(key=key, cumulative=float(value))
        for key, value in zip(keys, cumulative)
    ]


def build_drawdown(series: Sequence[Any], initial_capital: float = 0.0) -> List[DrawdownPoint]:
    """
    Track the running peak and the drawdown below it.

    Args:
        series:          Ordered elements exposing a key and a ``pnl``.
        initial_capital: Baseline for both equity and peak.

    Returns:
        One ``DrawdownPoint`` per input element.  Drawdown is never negative
        and returns to 0 exactly when a new peak is made.
    """
    keys, pnl = unpack_series(series)
    if not keys:
        return []

    curve = equity_curve(pnl, initial_capital)
    equity: np.ndarray = curve[1:]
    # the baseline seeds the running max so an opening loss is already a drawdown
    running_max: np.ndarray = np.maximum.accumulate(curve)[1:]
    drawdown: np.ndarray = np.maximum(running_max - equity, 0.0)

    return [
        DrawdownPoint(key=key, cumulative=float(eq), peak=float(pk), drawdown=float(dd))
        for key, eq, pk, dd in zip(keys, equity, running_max, drawdown)
    ]


def normalize_drawdown(
    points: Sequence[DrawdownPoint],
    center: float,
    full_scale: float,
) -> List[float]:
    """
    Rescale drawdowns into a display band for dual-axis overlays.

    ``[0, max_drawdown]`` maps linearly onto ``[center, center - full_scale]``.
    With no pullbacks at all the scale factor is 1, so every point sits at
    ``center``.
    """
    if not points:
        return []

    raw = np.array([p.drawdown for p in points], dtype=np.float64)
    max_drawdown = float(raw.max())
    scale = full_scale / max_drawdown if max_drawdown > 0.0 else 1.0
    logger.debug("Normalizing %d drawdowns, max=%.2f scale=%.6f", len(points), max_drawdown, scale)
    return (center - raw * scale).tolist()


def stop_levels(points: Sequence[DrawdownPoint], stop_amount: float, stop_type: str) -> List[float]:
    """
    Stop line aligned with a drawdown series.

    ``absolute`` keeps ``stop_amount`` dollars flat; ``relative`` treats it as
    a fraction of the running peak equity.
    """
    if stop_type == "absolute":
        return [float(stop_amount)] * len(points)
    if stop_type == "relative":
        return [float(stop_amount * p.peak) for p in points]
    raise ValueError(f"stop_type must be 'absolute' or 'relative', got {stop_type!r}.")

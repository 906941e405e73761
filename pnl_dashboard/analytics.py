"""
Summary statistics and period roll-ups for a set of dated trades.

All numeric work is done on NumPy arrays; pandas handles date grouping.
"""
from __future__ import annotations

from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd
from scipy import stats

from pnl_dashboard.filters import field_of, to_day
from pnl_dashboard.models import DrawdownPoint, PeriodPnL, TradeRecord, TradeStats
from pnl_dashboard.series import build_drawdown, equity_curve, sort_trades

_PERIOD_FORMATS = {"year": "%Y", "month": "%Y-%m"}


def _period_format(freq: str) -> str:
    try:
        return _PERIOD_FORMATS[freq]
    except KeyError:
        raise ValueError(f"freq must be one of {sorted(_PERIOD_FORMATS)}, got {freq!r}.") from None


def period_key(day: Any, freq: str = "year") -> str:
    """Period label of a day, e.g. ``"2024"`` for ``freq="year"`` or ``"2024-05"`` for ``"month"``."""
    return to_day(day).strftime(_period_format(freq))


def compute_trade_stats(pnl_series: Sequence[float], initial_capital: float = 0.0) -> TradeStats:
    """
    Compute the stats-summary figures from a per-trade PnL sequence.

    Args:
        pnl_series:      Per-trade PnL in dollar terms.
        initial_capital: Baseline of the equity curve used for max drawdown.

    Returns:
        ``TradeStats``; an empty selection yields all-zero figures.
    """
    pnl = np.asarray(pnl_series, dtype=np.float64)
    n = int(len(pnl))
    if n == 0:
        return TradeStats(**{name: 0 for name in TradeStats.model_fields})

    wins = pnl[pnl > 0]
    losses = pnl[pnl < 0]
    win_pct = 100.0 * len(wins) / n

    # ── Max drawdown ─────────────────────────────────────────────────────────────
    curve: np.ndarray = equity_curve(pnl, initial_capital)
    running_max: np.ndarray = np.maximum.accumulate(curve)
    max_drawdown = float(np.max(running_max[1:] - curve[1:]))

    # ── Per-trade Sharpe ratio ────────────────────────────────────────────────────
    mean_pnl = float(np.mean(pnl))
    std_pnl = float(np.std(pnl, ddof=1)) if n > 1 else 0.0
    sharpe = mean_pnl / std_pnl if std_pnl > 0.0 else 0.0

    # ── Distribution shape ────────────────────────────────────────────────────────
    # constant samples have no defined skew
    skewness = float(stats.skew(pnl)) if n > 2 and std_pnl > 0.0 else 0.0

    return TradeStats(
        total_trades=n,
        win_percentage=win_pct,
        loss_percentage=100.0 - win_pct,
        total_pnl=float(np.sum(pnl)),
        profit=float(np.sum(wins)),
        loss=abs(float(np.sum(losses))),
        profit_avg=float(np.mean(wins)) if len(wins) else 0.0,
        loss_avg=float(-np.mean(losses)) if len(losses) else 0.0,
        largest_win=float(np.max(wins)) if len(wins) else 0.0,
        largest_loss=float(-np.min(losses)) if len(losses) else 0.0,
        mean_pnl=mean_pnl,
        median_pnl=float(np.median(pnl)),
        std_pnl=std_pnl,
        sharpe_ratio=float(sharpe),
        skewness=skewness,
        max_drawdown=max(max_drawdown, 0.0),
    )


def aggregate_by_period(trades: Sequence[TradeRecord], freq: str = "year") -> List[PeriodPnL]:
    """
    Roll dated trades up into one ``PeriodPnL`` per calendar year or month.

    Periods come back in chronological order; periods without trades are
    omitted.
    """
    fmt = _period_format(freq)
    if not trades:
        return []

    frame = pd.DataFrame(
        {
            "date": pd.to_datetime([to_day(field_of(t, "date")) for t in trades]),
            "pnl": [float(field_of(t, "pnl")) for t in trades],
        }
    )
    frame["period"] = frame["date"].dt.strftime(fmt)
    totals = frame.groupby("period", sort=True)["pnl"].sum()
    return [PeriodPnL(period=str(period), pnl=float(pnl)) for period, pnl in totals.items()]


def drawdown_by_period(
    trades: Sequence[TradeRecord],
    initial_capital: float = 0.0,
    freq: str = "year",
) -> Dict[str, DrawdownPoint]:
    """
    Trailing drawdown at the last trade of each period.

    Trades are sorted chronologically first, folded once across the whole
    history, and the final point of every period is kept.
    """
    _period_format(freq)
    ordered = sort_trades(trades)
    points = build_drawdown(ordered, initial_capital)

    by_period: Dict[str, DrawdownPoint] = {}
    for trade, point in zip(ordered, points):
        by_period[period_key(field_of(trade, "date"), freq)] = point
    return by_period


def trade_pnls(trades: Sequence[Any]) -> List[float]:
    """Per-trade PnL values, in input order."""
    return [float(field_of(t, "pnl")) for t in trades]

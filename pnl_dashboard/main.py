"""
Dashboard screen assemblers.

Entry points
------------
build_yearly_overview    Yearly PnL, cumulative PnL with trailing drawdown,
                         strategy Monte Carlo paths and trade stats.
build_drawdown_analysis  Trade-level drawdown, display-band overlay and stop line.
build_order_history      Order rows for a named range preset.
main                     Command-line demo over the bundled sample data.

Each assembler takes already-fetched records plus ``DashboardSettings`` and
returns one pydantic payload; loading, fetch errors and rendering belong to
the presentation layer.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, List, Optional, Sequence

import numpy as np

from pnl_dashboard.analytics import compute_trade_stats, drawdown_by_period, period_key, trade_pnls
from pnl_dashboard.config import DashboardSettings
from pnl_dashboard.filters import filter_by_date_range, filter_orders, period_start, preset_range, to_day
from pnl_dashboard.models import (
    DrawdownAnalysis,
    OrderHistory,
    OrderRecord,
    PeriodDrawdown,
    PeriodPnL,
    TradeRecord,
    YearlyOverview,
)
from pnl_dashboard.monte_carlo import simulate_strategies
from pnl_dashboard.sample_data import REFERENCE_DAY, sample_orders, sample_periods, sample_trades
from pnl_dashboard.series import build_cumulative, build_drawdown, normalize_drawdown, sort_trades, stop_levels

logger = logging.getLogger(__name__)


def build_yearly_overview(
    periods: Sequence[PeriodPnL],
    trades: Sequence[TradeRecord],
    start: Any,
    end: Any,
    settings: Optional[DashboardSettings] = None,
    rng: Optional[np.random.Generator] = None,
    freq: str = "year",
) -> YearlyOverview:
    """
    Assemble the Yearly Overview screen for an inclusive date range.

    A period is in range when its first day is; trades are filtered by
    their own day.  When ``rng`` is omitted the settings' seed decides.

    ``freq`` names the granularity of the period labels (``"year"`` or
    ``"month"``); trades are rolled up the same way for the trailing
    drawdown, and a label of any other shape raises ``ValueError``.
    """
    settings = settings or DashboardSettings()
    for period in periods:
        if period_key(period_start(period.period), freq) != period.period:
            raise ValueError(f"Period label {period.period!r} does not match freq={freq!r}.")
    start_day, end_day = to_day(start), to_day(end)

    # ── Range selection ─────────────────────────────────────────────────────────
    selected = filter_by_date_range(periods, start_day, end_day, key=lambda p: period_start(p.period))
    selected_trades = sort_trades(filter_by_date_range(trades, start_day, end_day))
    logger.info(
        "Yearly overview %s..%s: %d periods, %d trades",
        start_day, end_day, len(selected), len(selected_trades),
    )

    # ── Cumulative PnL with trailing drawdown ───────────────────────────────────
    cumulative = build_cumulative(selected, settings.initial_capital)
    trailing = drawdown_by_period(selected_trades, settings.initial_capital, freq)
    combined = [
        PeriodDrawdown(
            period=point.key,
            cumulative=point.cumulative,
            drawdown=trailing[point.key].drawdown if point.key in trailing else 0.0,
        )
        for point in cumulative
    ]

    # ── Monte Carlo paths ────────────────────────────────────────────────────────
    simulations = []
    if selected:
        if rng is None:
            rng = settings.make_rng()
        simulations = simulate_strategies(
            selected, settings.variation_levels, rng=rng, start=settings.initial_capital
        )

    stats = compute_trade_stats(trade_pnls(selected_trades), settings.initial_capital)

    return YearlyOverview(
        start=start_day,
        end=end_day,
        yearly_pnl=[PeriodPnL(period=p.period, pnl=p.pnl) for p in selected],
        cumulative=combined,
        simulations=simulations,
        stats=stats,
    )


def build_drawdown_analysis(
    trades: Sequence[TradeRecord],
    settings: Optional[DashboardSettings] = None,
) -> DrawdownAnalysis:
    """Trade-by-trade drawdown from peak with its display overlay and stop line."""
    settings = settings or DashboardSettings()
    points = build_drawdown(sort_trades(trades), settings.initial_capital)

    return DrawdownAnalysis(
        points=points,
        normalized=normalize_drawdown(points, settings.drawdown_center, settings.drawdown_full_scale),
        stop_levels=stop_levels(points, settings.stop_amount, settings.stop_type),
        max_drawdown=max((p.drawdown for p in points), default=0.0),
    )


def build_order_history(orders: Sequence[OrderRecord], label: str, today: Any) -> OrderHistory:
    start, end = preset_range(label, today)
    selected: List[OrderRecord] = filter_orders(orders, label, today)
    logger.info("Order history %r: %d of %d orders", label, len(selected), len(orders))
    return OrderHistory(label=label, start=start, end=end, orders=selected)


# ── Command line ─────────────────────────────────────────────────────────────────

def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print a dashboard screen payload as JSON.")
    parser.add_argument("screen", choices=("yearly", "drawdown", "orders"))
    parser.add_argument("--start", default="2020-01-01")
    parser.add_argument("--end", default="2025-12-31")
    parser.add_argument("--initial-capital", type=float, default=0.0)
    parser.add_argument("--stop-amount", type=float, default=0.0)
    parser.add_argument("--stop-type", choices=("absolute", "relative"), default="absolute")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--preset", default="Year")
    parser.add_argument("--today", default=REFERENCE_DAY.isoformat())
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s  %(name)s  %(message)s")
    args = _parse_args(argv)

    try:
        settings = DashboardSettings(
            initial_capital=args.initial_capital,
            stop_amount=args.stop_amount,
            stop_type=args.stop_type,
            seed=args.seed,
        )
        if args.screen == "yearly":
            payload = build_yearly_overview(sample_periods(), sample_trades(), args.start, args.end, settings)
        elif args.screen == "drawdown":
            payload = build_drawdown_analysis(sample_trades(), settings)
        else:
            payload = build_order_history(sample_orders(), args.preset, args.today)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(payload.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

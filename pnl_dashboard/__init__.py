"""Chart-ready PnL transforms for the trading dashboard."""

from pnl_dashboard.filters import filter_by_date_range
from pnl_dashboard.monte_carlo import generate_paths, simulate_strategies
from pnl_dashboard.series import build_cumulative, build_drawdown, normalize_drawdown

__all__ = [
    "build_cumulative",
    "build_drawdown",
    "filter_by_date_range",
    "generate_paths",
    "normalize_drawdown",
    "simulate_strategies",
]

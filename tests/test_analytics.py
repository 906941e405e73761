from datetime import date

import pytest

from pnl_dashboard.analytics import aggregate_by_period, compute_trade_stats, drawdown_by_period, period_key
from pnl_dashboard.models import TradeRecord
from pnl_dashboard.sample_data import sample_trades


def test_trade_stats_reference_sequence():
    stats = compute_trade_stats([100, -50, 80, -200, 30])

    assert stats.total_trades == 5
    assert stats.win_percentage == pytest.approx(60.0)
    assert stats.loss_percentage == pytest.approx(40.0)
    assert stats.total_pnl == pytest.approx(-40.0)
    assert stats.profit == pytest.approx(210.0)
    assert stats.loss == pytest.approx(250.0)
    assert stats.profit_avg == pytest.approx(70.0)
    assert stats.loss_avg == pytest.approx(125.0)
    assert stats.largest_win == pytest.approx(100.0)
    assert stats.largest_loss == pytest.approx(200.0)
    assert stats.median_pnl == pytest.approx(30.0)
    assert stats.max_drawdown == pytest.approx(200.0)


def test_trade_stats_empty_selection():
    stats = compute_trade_stats([])

    assert stats.total_trades == 0
    assert stats.total_pnl == 0.0
    assert stats.win_percentage == 0.0


def test_trade_stats_constant_series():
    stats = compute_trade_stats([25.0, 25.0, 25.0, 25.0])

    assert stats.std_pnl == 0.0
    assert stats.sharpe_ratio == 0.0
    assert stats.skewness == 0.0
    assert stats.loss == 0.0
    assert stats.max_drawdown == 0.0


def test_trade_stats_opening_loss_counts_against_capital():
    stats = compute_trade_stats([-300.0, 100.0], initial_capital=10_000.0)

    assert stats.max_drawdown == pytest.approx(300.0)


def test_aggregate_by_year():
    periods = aggregate_by_period(sample_trades())

    assert [(p.period, p.pnl) for p in periods] == [
        ("2020", 80.0),
        ("2021", 130.0),
        ("2022", 110.0),
        ("2023", 200.0),
        ("2024", 140.0),
        ("2025", 190.0),
    ]


def test_aggregate_by_month_sorts_chronologically():
    trades = [
        TradeRecord(date=date(2024, 11, 3), pnl=10),
        TradeRecord(date=date(2024, 2, 9), pnl=-5),
        TradeRecord(date=date(2024, 11, 20), pnl=7),
    ]

    periods = aggregate_by_period(trades, freq="month")

    assert [(p.period, p.pnl) for p in periods] == [("2024-02", -5.0), ("2024-11", 17.0)]


def test_aggregate_rejects_unknown_frequency():
    with pytest.raises(ValueError):
        aggregate_by_period(sample_trades(), freq="week")


def test_aggregate_empty():
    assert aggregate_by_period([]) == []


def test_drawdown_by_period_uses_last_trade_of_each_year():
    trades = list(reversed(sample_trades()))

    by_year = drawdown_by_period(trades)

    assert {year: point.drawdown for year, point in by_year.items()} == {
        "2020": 40.0,
        "2021": 80.0,
        "2022": 0.0,
        "2023": 120.0,
        "2024": 0.0,
        "2025": 0.0,
    }
    assert by_year["2025"].cumulative == pytest.approx(850.0)


def test_period_key():
    assert period_key(date(2024, 5, 17)) == "2024"
    assert period_key("2024-05-17", freq="month") == "2024-05"


def test_drawdown_by_month():
    trades = [
        TradeRecord(date=date(2024, 1, 15), pnl=100),
        TradeRecord(date=date(2024, 2, 10), pnl=-60),
    ]

    by_month = drawdown_by_period(trades, freq="month")

    assert {month: point.drawdown for month, point in by_month.items()} == {"2024-01": 0.0, "2024-02": 60.0}

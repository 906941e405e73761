import math
from datetime import date, datetime

import numpy as np
import pytest

from pnl_dashboard.models import DrawdownPoint, SeriesInput, TradeRecord
from pnl_dashboard.series import build_cumulative, build_drawdown, normalize_drawdown, sort_trades, stop_levels


def _series(values):
    return [SeriesInput(key=str(i), pnl=v) for i, v in enumerate(values)]


def test_cumulative_matches_running_total():
    points = build_cumulative(_series([100, -50, 80, -200, 30]))

    assert [p.key for p in points] == ["0", "1", "2", "3", "4"]
    assert [p.cumulative for p in points] == [100, 50, 130, -70, -40]


def test_cumulative_empty_input():
    assert build_cumulative([]) == []


def test_cumulative_last_value_is_total():
    values = np.random.default_rng(3).normal(0.0, 250.0, size=200).tolist()
    points = build_cumulative(_series(values))

    assert len(points) == len(values)
    assert points[-1].cumulative == pytest.approx(math.fsum(values))


def test_cumulative_accepts_mappings_and_baseline():
    points = build_cumulative([{"period": "2020", "pnl": 80}, {"period": "2021", "pnl": 130}], 1000.0)

    assert [(p.key, p.cumulative) for p in points] == [("2020", 1080.0), ("2021", 1210.0)]


def test_drawdown_reference_sequence():
    points = build_drawdown(_series([100, -50, 80, -200, 30]))

    assert [p.cumulative for p in points] == [100, 50, 130, -70, -40]
    assert [p.peak for p in points] == [100, 100, 130, 130, 130]
    assert [p.drawdown for p in points] == [0, 50, 0, 200, 170]


def test_drawdown_trivial_inputs():
    assert build_drawdown([]) == []

    (point,) = build_drawdown([SeriesInput(key="a", pnl=100)])
    assert (point.key, point.cumulative, point.drawdown) == ("a", 100, 0)


def test_drawdown_never_negative():
    values = np.random.default_rng(11).normal(5.0, 100.0, size=500).tolist()

    assert all(p.drawdown >= 0.0 for p in build_drawdown(_series(values)))


def test_drawdown_resets_on_new_peak():
    points = build_drawdown(_series([50, -20, -10, 45, 5]))

    assert [p.drawdown for p in points] == [0, 20, 30, 0, 0]


def test_drawdown_starts_from_initial_capital():
    points = build_drawdown(_series([-100, 50, 200]), initial_capital=1000.0)

    assert [p.cumulative for p in points] == [900, 950, 1150]
    assert [p.peak for p in points] == [1000, 1000, 1150]
    assert [p.drawdown for p in points] == [100, 50, 0]


def test_normalize_maps_max_drawdown_to_band_edge():
    points = build_drawdown(_series([100, -50, 80, -200, 30]))

    assert normalize_drawdown(points, center=1000.0, full_scale=1000.0) == [1000, 750, 1000, 0, 150]


def test_normalize_without_pullbacks_stays_at_center():
    points = build_drawdown(_series([10, 20, 30]))
    normalized = normalize_drawdown(points, center=500.0, full_scale=250.0)

    assert normalized == [500.0, 500.0, 500.0]
    assert all(math.isfinite(v) for v in normalized)


def test_normalize_empty():
    assert normalize_drawdown([], center=1000.0, full_scale=1000.0) == []


def test_stop_levels():
    points = build_drawdown(_series([100, -50, 80, -200, 30]))

    assert stop_levels(points, 75.0, "absolute") == [75.0] * 5
    assert stop_levels(points, 0.1, "relative") == pytest.approx([10, 10, 13, 13, 13])

    with pytest.raises(ValueError):
        stop_levels(points, 0.1, "trailing")


def test_sort_trades_is_stable_by_day():
    trades = [
        TradeRecord(date=date(2024, 3, 2), pnl=1),
        TradeRecord(date=datetime(2024, 3, 1, 15, 30), pnl=2),
        TradeRecord(date=date(2024, 3, 1), pnl=3),
        TradeRecord(date="2023-12-31", pnl=4),
    ]

    assert [t.pnl for t in sort_trades(trades)] == [4, 2, 3, 1]
    assert [t.pnl for t in trades] == [1, 2, 3, 4]


def test_drawdown_point_rejects_negative_drawdown():
    with pytest.raises(ValueError):
        DrawdownPoint(key="x", cumulative=0.0, peak=0.0, drawdown=-1.0)


def test_baseline_is_folded_in_trade_order():
    expected = 0.1
    for value in (0.2, 0.3):
        expected += value

    (_, last) = build_cumulative(_series([0.2, 0.3]), initial_capital=0.1)
    (_, last_drawdown) = build_drawdown(_series([0.2, 0.3]), initial_capital=0.1)

    assert last.cumulative == expected
    assert last_drawdown.cumulative == expected

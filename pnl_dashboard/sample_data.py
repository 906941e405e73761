"""
Static dashboard fixtures: yearly PnL, dated trades and order history rows.
"""
import datetime as dt
from typing import List

from pnl_dashboard.models import OrderRecord, PeriodPnL, TradeRecord

REFERENCE_DAY = dt.date(2025, 5, 21)

_YEARLY_PNL = [
    ("2020", 80.0),
    ("2021", 130.0),
    ("2022", 110.0),
    ("2023", 200.0),
    ("2024", 140.0),
    ("2025", 190.0),
]

_TRADES = [
    ("2020-02-14", 120.0),
    ("2020-07-03", -40.0),
    ("2021-01-19", 210.0),
    ("2021-09-30", -80.0),
    ("2022-03-08", -150.0),
    ("2022-11-22", 260.0),
    ("2023-04-11", 320.0),
    ("2023-10-05", -120.0),
    ("2024-02-27", -90.0),
    ("2024-08-16", 230.0),
    ("2025-01-09", 140.0),
    ("2025-05-20", 50.0),
]

_ORDERS = [
    ("2025-05-21", "20:45", "SP500", 5895.5, 5895.5, -28.0, "Sell", 0.48),
    ("2025-05-21", "20:30", "SP500", 5895.5, 5895.5, -15.0, "Sell", 0.72),
    ("2025-05-21", "20:25", "SP500", 5895.5, 5895.5, -15.0, "Sell", 0.13),
    ("2025-05-21", "20:15", "NDX", 5795.5, 5892.0, 0.0, "Sell", 0.13),
    ("2025-05-21", "20:00", "SP500", 5892.0, 5892.0, 0.0, "Buy", -0.12),
    ("2025-05-20", "19:55", "NDX", 5890.0, 5892.0, 0.0, "Buy", -0.12),
    ("2025-05-20", "19:50", "NDX", 5890.0, 5890.0, 27.5, "Buy", -0.12),
    ("2025-05-20", "19:45", "NDX", 5795.3, 5890.0, 27.5, "Buy", -0.12),
    ("2025-05-20", "19:40", "SP500", 5795.3, 5890.0, 0.0, "Buy", -0.12),
]


def sample_periods() -> List[PeriodPnL]:
    return [PeriodPnL(period=period, pnl=pnl) for period, pnl in _YEARLY_PNL]


def sample_trades() -> List[TradeRecord]:
    return [TradeRecord(date=day, pnl=pnl) for day, pnl in _TRADES]


def sample_orders() -> List[OrderRecord]:
    fields = ("date", "time", "symbol", "open", "close", "change", "direction", "pnl_pct")
    return [OrderRecord(**dict(zip(fields, row))) for row in _ORDERS]

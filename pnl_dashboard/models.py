"""
Pydantic data models for the PnL series transforms and dashboard payloads.
"""
import datetime as dt
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pnl_dashboard.filters import to_day


class TradeRecord(BaseModel):
    """One closed trade's profit or loss on a given day."""
    model_config = ConfigDict(frozen=True)

    date: dt.date
    pnl: float

    @field_validator("date", mode="before")
    @classmethod
    def _day_precision(cls, value):
        # datetimes and ISO strings collapse to their calendar day
        return to_day(value)


class PeriodPnL(BaseModel):
    """Aggregate PnL for one period label (e.g. "2024")."""
    period: str
    pnl: float


class SeriesInput(BaseModel):
    key: str
    pnl: float


class CumulativePoint(BaseModel):
    key: str
    cumulative: float


class DrawdownPoint(BaseModel):
    key: str
    cumulative: float
    peak: float
    drawdown: float = Field(ge=0.0)     # dollars below the running peak


class PathPoint(BaseModel):
    period: str
    value: float


class SimulatedPath(BaseModel):
    """One randomized cumulative path and the variation bound that produced it."""
    label: str
    bound: float
    points: List[PathPoint]


class OrderRecord(BaseModel):
    """A single row of the order history table."""
    date: dt.date
    time: str
    symbol: str
    open: float
    close: float
    change: float
    direction: Literal["Buy", "Sell"]
    pnl_pct: float                      # e.g. 0.48 means +0.48 %

    @field_validator("date", mode="before")
    @classmethod
    def _day_precision(cls, value):
        return to_day(value)


class TradeStats(BaseModel):
    total_trades: int
    win_percentage: float
    loss_percentage: float
    total_pnl: float
    profit: float                # gross profit, sum of winning trades
    loss: float                  # gross loss, reported as a positive magnitude
    profit_avg: float
    loss_avg: float
    largest_win: float
    largest_loss: float
    mean_pnl: float
    median_pnl: float
    std_pnl: float
    sharpe_ratio: float          # per-trade Sharpe (mean/std of PnL)
    skewness: float
    max_drawdown: float          # dollars, peak-to-trough


class PeriodDrawdown(BaseModel):
    """Cumulative period PnL joined with the trailing drawdown at period end."""
    period: str
    cumulative: float
    drawdown: float


class YearlyOverview(BaseModel):
    start: dt.date
    end: dt.date
    yearly_pnl: List[PeriodPnL]
    cumulative: List[PeriodDrawdown]
    simulations: List[SimulatedPath]
    stats: TradeStats


class DrawdownAnalysis(BaseModel):
    points: List[DrawdownPoint]
    normalized: List[float]
    stop_levels: List[float]
    max_drawdown: float


class OrderHistory(BaseModel):
    label: str
    start: dt.date
    end: dt.date
    orders: List[OrderRecord]

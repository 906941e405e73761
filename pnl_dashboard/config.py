"""
Display settings shared by the screen assemblers.

Values arrive from the presentation layer as plain configuration; nothing
here reads environment variables or files.
"""
from typing import Dict, Literal, Optional

import numpy as np
from pydantic import BaseModel, Field, field_validator

# Conservative, Modest, Aggressive
DEFAULT_VARIATION_LEVELS: Dict[str, float] = {
    "Conservative": 0.05,
    "Modest": 0.15,
    "Aggressive": 0.30,
}


class DashboardSettings(BaseModel):
    initial_capital: float = 0.0          # baseline for every cumulative and drawdown fold
    stop_amount: float = 0.0
    stop_type: Literal["absolute", "relative"] = "absolute"
    variation_levels: Dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_VARIATION_LEVELS)
    )
    drawdown_center: float = 1000.0
    drawdown_full_scale: float = 1000.0
    seed: Optional[int] = None

    @field_validator("variation_levels")
    @classmethod
    def _bounds_in_unit_interval(cls, value: Dict[str, float]) -> Dict[str, float]:
        if not value:
            raise ValueError("variation_levels must name at least one strategy")
        for label, bound in value.items():
            if not 0.0 <= bound <= 1.0:
                raise ValueError(f"variation bound for {label!r} must lie in [0, 1], got {bound}")
        return value

    @field_validator("drawdown_full_scale")
    @classmethod
    def _positive_scale(cls, value: float) -> float:
        if value <= 0.0:
            raise ValueError("drawdown_full_scale must be positive")
        return value

    def make_rng(self) -> np.random.Generator:
        """Random source for simulations; seeded when ``seed`` is set."""
        return np.random.default_rng(self.seed)

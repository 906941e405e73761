"""
Randomized perturbation paths over a base period PnL series.

Methodology
-----------
For each path ``p`` with variation bound ``b_p`` and each period ``i``:
    1. Draw ``u ~ Uniform(-b_p, +b_p)`` independently for every (path, period).
    2. ``variation = pnl[i] * u``.
    3. ``value[i] = value[i-1] + pnl[i] + variation`` with ``value[-1] = start``
       (0 unless the caller anchors the paths to a capital baseline).

This is an illustrative projection, not a calibrated stochastic model.
All paths are drawn in one vectorised pass from the caller's
``numpy.random.Generator``; pass a seeded generator for reproducible output.
A path with bound 0 reproduces the plain cumulative series exactly.
"""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence

import numpy as np

from pnl_dashboard.models import PathPoint, SimulatedPath
from pnl_dashboard.series import unpack_series

logger = logging.getLogger(__name__)


def generate_paths(
    base: Sequence[Any],
    path_count: int,
    bounds: Sequence[float],
    rng: Optional[np.random.Generator] = None,
    start: float = 0.0,
) -> List[List[PathPoint]]:
    """
    Generate ``path_count`` perturbed cumulative paths.

    Args:
        base:       Ordered period series exposing ``period`` (or ``key``) and ``pnl``.
        path_count: Number of paths, at least 1.
        bounds:     Variation bound per path, each in ``[0, 1]``.
        rng:        Random source; a fresh unseeded generator when omitted.
        start:      Value every path starts from before the first period.

    Returns:
        ``path_count`` lists of ``PathPoint``, each as long as ``base``.

    Raises:
        ValueError: On a non-positive path count or malformed bounds.
    """
    if path_count < 1:
        raise ValueError(f"path_count must be at least 1, got {path_count}.")

    try:
        bounds_arr = np.asarray(bounds, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"bounds must be a sequence of numbers, got {bounds!r}.") from exc
    if bounds_arr.shape != (path_count,):
        raise ValueError(
            f"bounds must have length path_count ({path_count}), got shape {bounds_arr.shape}."
        )
    if np.any(~np.isfinite(bounds_arr)) or np.any((bounds_arr < 0.0) | (bounds_arr > 1.0)):
        raise ValueError(f"Every bound must lie in [0, 1], got {bounds_arr.tolist()}.")

    periods, pnl = unpack_series(base)
    if rng is None:
        rng = np.random.default_rng()

    # ── Vectorised perturbation ─────────────────────────────────────────────────
    # Shape: (path_count, n_periods); one independent draw per cell
    limits = bounds_arr[:, None]
    draws: np.ndarray = rng.uniform(-limits, limits, size=(path_count, len(periods)))
    variation: np.ndarray = pnl * draws

    # paths[p, i] = value after the (i+1)-th period on path p; column 0 holds the start
    steps: np.ndarray = pnl + variation
    anchor = np.full((path_count, 1), float(start))
    paths: np.ndarray = np.cumsum(np.concatenate((anchor, steps), axis=1), axis=1)[:, 1:]

    logger.debug("Generated %d paths over %d periods", path_count, len(periods))
    return [
        [PathPoint(period=period, value=float(value)) for period, value in zip(periods, row)]
        for row in paths
    ]


def simulate_strategies(
    base: Sequence[Any],
    variation_levels: Mapping[str, float],
    rng: Optional[np.random.Generator] = None,
    start: float = 0.0,
) -> List[SimulatedPath]:
    """
    One path per named strategy preset (e.g. Conservative / Modest / Aggressive).

    Presets keep the iteration order of ``variation_levels``.
    ``start`` anchors every path, e.g. to the dashboard's initial capital.
    """
    if not variation_levels:
        raise ValueError("variation_levels must name at least one strategy.")

    labels = list(variation_levels)
    bounds = [float(variation_levels[label]) for label in labels]
    paths = generate_paths(base, len(labels), bounds, rng=rng, start=start)

    logger.info("Simulated strategies %s over %d periods", labels, len(base))
    return [
        SimulatedPath(label=label, bound=bound, points=points)
        for label, bound, points in zip(labels, bounds, paths)
    ]

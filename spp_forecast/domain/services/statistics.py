"""Descriptive statistics and forecast error metrics.

These feed display values only, so they degrade to NaN / None instead of
raising on empty or degenerate input.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from spp_forecast.domain.entities.metrics import BacktestResult, DailyStats

DEFAULT_MAPE_EPSILON = 1e-6


def _aligned(
    actual: Sequence[float], predicted: Sequence[float]
) -> tuple[np.ndarray, np.ndarray]:
    # Pairs positionally; the longer series is truncated.
    n = min(len(actual), len(predicted))
    return (
        np.asarray(actual[:n], dtype=float),
        np.asarray(predicted[:n], dtype=float),
    )


def daily_stats(values: Sequence[float]) -> DailyStats:
    """Min, max, mean and population standard deviation of ``values``."""
    if len(values) == 0:
        return DailyStats.empty()

    data = np.asarray(values, dtype=float)
    return DailyStats(
        min=float(data.min()),
        max=float(data.max()),
        avg=float(data.mean()),
        std=float(data.std(ddof=0)),
    )


def mae(actual: Sequence[float], predicted: Sequence[float]) -> float:
    """Mean absolute error; NaN when either series is empty."""
    a, p = _aligned(actual, predicted)
    if a.size == 0:
        return float("nan")
    return float(np.mean(np.abs(a - p)))


def mape(
    actual: Sequence[float],
    predicted: Sequence[float],
    epsilon: float = DEFAULT_MAPE_EPSILON,
) -> Optional[float]:
    """
    Mean absolute percentage error, in percent.

    Pairs whose actual value is within ``epsilon`` of zero (or not finite) are
    left out. Returns None when no pair is left.
    """
    a, p = _aligned(actual, predicted)
    if a.size == 0:
        return None

    mask = np.isfinite(a) & (np.abs(a) > epsilon)
    if not mask.any():
        return None

    ratios = np.abs((a[mask] - p[mask]) / a[mask])
    return float(np.mean(ratios) * 100.0)


def backtest(
    actual: Sequence[float],
    predicted: Sequence[float],
    epsilon: float = DEFAULT_MAPE_EPSILON,
) -> BacktestResult:
    """MAE, MAPE and the number of aligned pairs they were computed over."""
    return BacktestResult(
        mae=mae(actual, predicted),
        mape=mape(actual, predicted, epsilon),
        sample_count=min(len(actual), len(predicted)),
    )

"""Rolling-window statistics, smoothing and sequence construction.

Trailing statistics are computed over the window that ends just before each
point, so the value at ``i`` is described only by the observations before it.
Each window is reduced separately with numpy. Smoothing uses a centered pandas
rolling window that shrinks at both ends of the series instead of padding.
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np
import pandas as pd

from ..exceptions import InvalidWindowError
from ..schemas import SequenceSet, StatisticalFeature


def _check_window(size: int, name: str) -> None:
    if size < 1:
        raise InvalidWindowError(f"{name} must be at least 1, got {size}")


def calculate_statistical_features(series: Sequence[float], window_size: int = 7) -> List[StatisticalFeature]:
    """Describe each point by the statistics of the window preceding it.

    For every ``i`` from ``window_size`` to ``len(series) - 1`` the window is
    ``series[i - window_size:i]``. Mean, population variance and standard
    deviation, median, minimum and maximum of that window are reported along
    with ``series[i]`` itself. Each window is reduced on its own (two-pass
    variance), so large offsets do not accumulate rounding error along the
    series. Series no longer than the window produce no features.
    """
    _check_window(window_size, "window_size")
    values = np.array(series, dtype=float)
    count = values.size - window_size
    if count <= 0:
        return []

    # Row k is the window series[k:k + w], which precedes index k + w
    windows = np.lib.stride_tricks.sliding_window_view(values, window_size)[:count]
    means = windows.mean(axis=1)
    variances = windows.var(axis=1)
    medians = np.median(windows, axis=1)
    lows = windows.min(axis=1)
    highs = windows.max(axis=1)

    features: List[StatisticalFeature] = []
    for k in range(count):
        idx = k + window_size
        features.append(StatisticalFeature(
            index=idx,
            value=float(values[idx]),
            mean=float(means[k]),
            std_dev=float(np.sqrt(variances[k])),
            median=float(medians[k]),
            variance=float(variances[k]),
            min=float(lows[k]),
            max=float(highs[k]),
        ))
    return features


def apply_moving_average(series: Sequence[float], window_size: int = 5) -> List[float]:
    """Smooth a series with a centered moving average of the same length.

    Index ``i`` averages ``series[max(0, i - w // 2):min(n, i + w // 2 + 1)]``.
    Near the edges fewer neighbours exist and the window simply shrinks, so
    the first value of ``[1, 2, 3, 4, 5]`` with ``w=3`` is the mean of
    ``[1, 2]``. An even ``window_size`` behaves like the next odd size.
    """
    _check_window(window_size, "window_size")
    values = pd.Series(np.array(series, dtype=float))
    if values.empty:
        return []
    span = 2 * (window_size // 2) + 1
    smoothed = values.rolling(window=span, center=True, min_periods=1).mean()
    return smoothed.tolist()


def create_time_series_sequences(series: Sequence[float], sequence_length: int = 30) -> SequenceSet:
    """Build supervised (sequence, next value) pairs from a series.

    Sequence ``i`` is ``series[i:i + sequence_length]`` and its target is
    ``series[i + sequence_length]``. When the series is not longer than
    ``sequence_length`` both lists are empty.
    """
    _check_window(sequence_length, "sequence_length")
    values = np.array(series, dtype=float)
    count = values.size - sequence_length
    if count <= 0:
        return SequenceSet()
    windows = np.lib.stride_tricks.sliding_window_view(values, sequence_length)[:count]
    return SequenceSet(sequences=windows.tolist(), targets=values[sequence_length:].tolist())

"""Pairwise and period-over-period comparison metrics."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd

from ..exceptions import LengthMismatchError
from ..schemas import CorrelationEntry


def calculate_correlation(series_x: Sequence[float], series_y: Sequence[float]) -> float:
    """Pearson correlation coefficient of two equally long series.

    Returns 0.0 for empty input and whenever either series has zero variance,
    so the result is always a finite number in [-1, 1].

    Raises
    ------
    LengthMismatchError
        If the two series differ in length.
    """
    if len(series_x) != len(series_y):
        raise LengthMismatchError(len(series_x), len(series_y))
    if len(series_x) == 0:
        return 0.0

    x = np.array(series_x, dtype=float)
    y = np.array(series_y, dtype=float)
    dx = x - x.mean()
    dy = y - y.mean()
    denominator = float(np.sqrt(np.sum(dx * dx) * np.sum(dy * dy)))
    if denominator == 0:
        return 0.0
    return float(np.sum(dx * dy)) / denominator


def calculate_percentage_change(old_value: float, new_value: float) -> float:
    """Relative change from ``old_value`` to ``new_value`` in percent.

    A zero starting point has no meaningful ratio: the change is reported as
    0 when the new value is also zero and as a flat 100 otherwise.
    """
    if old_value == 0:
        return 0.0 if new_value == 0 else 100.0
    return (new_value - old_value) / abs(old_value) * 100


def compute_metric_correlations(records: Sequence[Dict[str, Any]], metrics: Sequence[str]) -> List[CorrelationEntry]:
    """Compute pairwise Pearson correlations between metrics of a record set.

    Each pair only uses the records where both metrics are present. Pairs
    sharing fewer than two records are omitted. Entries follow the order of
    ``metrics``.
    """
    frame = pd.DataFrame(list(records), columns=list(metrics))
    frame = frame.apply(pd.to_numeric, errors="coerce")
    correlations: List[CorrelationEntry] = []
    for i, m1 in enumerate(metrics):
        for m2 in metrics[i + 1:]:
            pair = frame[[m1, m2]].dropna()
            if len(pair) < 2:
                continue
            correlations.append(CorrelationEntry(
                metric_x=m1,
                metric_y=m2,
                correlation=calculate_correlation(pair[m1].tolist(), pair[m2].tolist()),
            ))
    return correlations

"""Scaling and outlier utilities for campaign metrics.

This module implements min-max normalisation (and its inverse) used to
prepare metric columns for model training, and IQR-based outlier detection
used both for cleaning series and for scoring data consistency.

The functions are stateless and never modify their input: values are
converted to a fresh numpy array before any sorting or arithmetic. Quartiles
are picked by index from the sorted copy instead of being interpolated, so
results at small sample sizes match what dashboard consumers already expect.
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from ..schemas import NormalizationResult, OutlierBounds, OutlierPoint, OutlierResult


def _as_array(series: Sequence[float]) -> np.ndarray:
    return np.array(series, dtype=float)


def normalize_data(series: Sequence[float]) -> NormalizationResult:
    """Scale a numeric series into the [0, 1] range.

    Parameters
    ----------
    series:
        Ordered numeric values without missing entries.

    Returns
    -------
    NormalizationResult
        The scaled values together with the ``min`` and ``max`` needed to
        invert the mapping. An empty series yields ``min=0`` and ``max=1``.
        A constant series maps every value to 0.5 and reports the constant
        as both ``min`` and ``max``.
    """
    values = _as_array(series)
    if values.size == 0:
        return NormalizationResult(normalized=[], min=0.0, max=1.0)

    low = float(values.min())
    high = float(values.max())
    span = high - low
    if span == 0:
        return NormalizationResult(normalized=[0.5] * values.size, min=low, max=high)

    scaled = (values - low) / span
    return NormalizationResult(normalized=scaled.tolist(), min=low, max=high)


def denormalize_data(normalized: Sequence[float], min_value: float, max_value: float) -> List[float]:
    """Map normalised values back to the scale given by ``min_value``/``max_value``."""
    values = _as_array(normalized)
    return (values * (max_value - min_value) + min_value).tolist()


def detect_outliers(series: Sequence[float], multiplier: float = 1.5) -> OutlierResult:
    """Split a series into outliers and retained values using the IQR rule.

    The first and third quartiles are the elements of the sorted series at
    positions ``floor(0.25 * n)`` and ``floor(0.75 * n)``. Values strictly
    below ``q1 - multiplier * iqr`` or strictly above
    ``q3 + multiplier * iqr`` are outliers.

    Parameters
    ----------
    series:
        Numeric values without missing entries.
    multiplier:
        Width of the fences in IQR units. Defaults to 1.5.

    Returns
    -------
    OutlierResult
        Outliers with their original index, in input order; the remaining
        values in input order; the fences; and ``q1``, ``q3`` and ``iqr``.
        For an empty series the quartiles and fences are None.
    """
    values = _as_array(series)
    n = values.size
    if n == 0:
        return OutlierResult()

    ordered = np.sort(values)
    q1 = float(ordered[int(n * 0.25)])
    q3 = float(ordered[int(n * 0.75)])
    iqr = q3 - q1
    lower = q1 - multiplier * iqr
    upper = q3 + multiplier * iqr

    mask = (values < lower) | (values > upper)
    outliers = [
        OutlierPoint(index=int(idx), value=float(values[idx]))
        for idx in np.flatnonzero(mask)
    ]
    return OutlierResult(
        outliers=outliers,
        cleaned=values[~mask].tolist(),
        bounds=OutlierBounds(lower=lower, upper=upper),
        q1=q1,
        q3=q3,
        iqr=iqr,
    )

"""Helpers for reading scalar fields out of metric records."""

from __future__ import annotations

import numbers
from typing import Any

import numpy as np
import pandas as pd


def is_missing(value: Any) -> bool:
    """True for None and for float/NumPy/pandas missing markers (NaN, NaT, NA)."""
    if value is None:
        return True
    if not pd.api.types.is_scalar(value):
        return False
    return bool(pd.isna(value))


def is_number(value: Any) -> bool:
    """True for real numbers, excluding booleans and missing values."""
    return (
        isinstance(value, numbers.Real)
        and not isinstance(value, bool)
        and not is_missing(value)
    )


def to_python(value: Any) -> Any:
    """Unwrap NumPy scalars so results serialise with pydantic/json."""
    if isinstance(value, np.generic):
        return value.item()
    return value

"""Data pipeline utilities for campaign metrics.

This package contains the stateless numeric building blocks used by the
dashboard: scaling, outlier detection, rolling statistics, sequence
construction, correlation, change metrics, time bucketing and training-set
assembly. Every function takes plain lists or records and returns new
objects; inputs are never modified.
"""

from .metrics import calculate_correlation, calculate_percentage_change, compute_metric_correlations  # noqa: F401
from .normalization import denormalize_data, detect_outliers, normalize_data  # noqa: F401
from .temporal import (  # noqa: F401
    aggregate_grouped_data,
    calculate_period_changes,
    group_by_time_period,
    parse_timestamp,
    record_timestamp,
)
from .training import prepare_training_data  # noqa: F401
from .windowing import (  # noqa: F401
    apply_moving_average,
    calculate_statistical_features,
    create_time_series_sequences,
)

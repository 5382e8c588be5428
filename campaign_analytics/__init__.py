"""
Statistical data-processing library for the campaign analytics dashboard.

Provider metrics (ads, social, web analytics) are normalised, smoothed,
bucketed by time, scored for quality and turned into training sets here.
Everything is exposed as plain function calls; storage, rendering and model
serving belong to the callers.
"""

from .data_pipeline import (  # noqa: F401
    aggregate_grouped_data,
    apply_moving_average,
    calculate_correlation,
    calculate_percentage_change,
    calculate_period_changes,
    calculate_statistical_features,
    compute_metric_correlations,
    create_time_series_sequences,
    denormalize_data,
    detect_outliers,
    group_by_time_period,
    normalize_data,
    parse_timestamp,
    prepare_training_data,
    record_timestamp,
)
from .exceptions import (  # noqa: F401
    AnalyticsError,
    InvalidWindowError,
    LengthMismatchError,
    ReservedFieldError,
    UnknownPeriodError,
)
from .models import DataQualityScorer, MetricAnomalyDetector, calculate_data_quality  # noqa: F401

__version__ = "0.1.0"

"""Scoring and detection classes built on the data pipeline functions."""

from .anomaly_detector import MetricAnomalyDetector  # noqa: F401
from .quality_scorer import DataQualityScorer, calculate_data_quality  # noqa: F401

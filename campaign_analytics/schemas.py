"""
Pydantic schemas for the results returned by the campaign analytics library.

Every result is a plain data container made of numbers, strings, lists and
nested models, so ``model_dump_json()`` followed by ``model_validate_json()``
reproduces it exactly.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NormalizationParams(BaseModel):
    """Scale of a series at normalisation time, needed to invert it."""

    min: float = Field(..., description="Smallest observed value")
    max: float = Field(..., description="Largest observed value")


class NormalizationResult(NormalizationParams):
    """Min-max scaled values together with the scale they were mapped from.

    A constant series has ``min == max`` and every normalised value is 0.5.
    """

    normalized: List[float] = Field(default_factory=list)


class FieldNormalization(NormalizationParams):
    """Normalisation parameters of one named feature column."""

    field: str


class OutlierPoint(BaseModel):
    """A value outside the IQR fences and its position in the input series."""

    index: int
    value: float


class OutlierBounds(BaseModel):
    """Lower and upper fences. Both are None for an empty series."""

    lower: Optional[float] = None
    upper: Optional[float] = None


class OutlierResult(BaseModel):
    """Outcome of IQR outlier detection.

    ``q1`` and ``q3`` are picked by index from the sorted series rather than
    interpolated. They are None, like the bounds, when the series is empty.
    """

    outliers: List[OutlierPoint] = Field(default_factory=list)
    cleaned: List[float] = Field(default_factory=list)
    bounds: OutlierBounds = Field(default_factory=OutlierBounds)
    q1: Optional[float] = None
    q3: Optional[float] = None
    iqr: Optional[float] = None


class StatisticalFeature(BaseModel):
    """Descriptive statistics of the trailing window that precedes ``index``.

    ``value`` is the observation at ``index`` itself, which is not part of the
    window. Variance and standard deviation are population estimates.
    """

    index: int
    value: float
    mean: float
    std_dev: float
    median: float
    variance: float
    min: float
    max: float


class SequenceSet(BaseModel):
    """Sliding-window input sequences and the value that follows each one."""

    sequences: List[List[float]] = Field(default_factory=list)
    targets: List[float] = Field(default_factory=list)


class AggregatedBucket(BaseModel):
    """Totals for one time bucket.

    Besides ``period`` and ``count`` the bucket carries one extra attribute per
    summed or averaged field, named after that field.
    """

    model_config = ConfigDict(extra="allow")

    period: str = Field(..., description="YYYY-MM-DD for day/week buckets, YYYY-MM for months")
    count: int = Field(..., description="Number of records in the bucket")


class PeriodChange(BaseModel):
    """Percentage change of a field between two consecutive buckets."""

    period: str
    previous_period: str
    field: str
    previous: float
    current: float
    change: float


class TrainingMetadata(BaseModel):
    """Bookkeeping needed to interpret and invert a training dataset.

    ``count`` is the number of records that survived filtering; when it is 0
    the remaining fields keep their empty defaults.
    """

    count: int = 0
    feature_fields: List[str] = Field(default_factory=list)
    target_field: Optional[str] = None
    feature_normalization: List[FieldNormalization] = Field(default_factory=list)
    target_normalization: Optional[NormalizationParams] = None


class TrainingDataset(BaseModel):
    """Normalised feature matrix (rows are records) and target vector."""

    features: List[List[float]] = Field(default_factory=list)
    targets: List[float] = Field(default_factory=list)
    metadata: TrainingMetadata = Field(default_factory=TrainingMetadata)


class QualityDetails(BaseModel):
    """Sub-scores of a data-quality report, each rounded to two decimals."""

    completeness: float = 0.0
    consistency: float = 0.0
    recency: float = 0.0
    total_records: int = 0
    complete_records: int = 0
    latest_data_age: Optional[int] = Field(
        None, description="Whole days between now and the latest record"
    )


class QualityReport(BaseModel):
    """Composite data-quality score in [0, 1] and the details behind it."""

    score: float = 0.0
    details: QualityDetails = Field(default_factory=QualityDetails)


class CorrelationEntry(BaseModel):
    """Pearson correlation between two metrics."""

    metric_x: str
    metric_y: str
    correlation: float


class AnomalyPoint(BaseModel):
    """A metric value that deviates strongly from its trailing window."""

    metric: str
    date: Optional[str]
    value: float
    z_score: float
    direction: str


class AnomalySummary(BaseModel):
    """Anomalies found across metrics, with one narrative line per point."""

    has_anomalies: bool = False
    details: List[str] = Field(default_factory=list)
    points: List[AnomalyPoint] = Field(default_factory=list)

"""Data-quality scoring for metric datasets.

The :class:`DataQualityScorer` condenses a dataset into a single score in
[0, 1] built from three factors: how complete the records are, how free the
numeric fields are of IQR outliers, and how recent the latest record is.
The current time is injected through a clock so scores are reproducible.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import pandas as pd

from ..config import Settings, get_settings
from ..data_pipeline.normalization import detect_outliers
from ..data_pipeline.records import is_missing, is_number
from ..data_pipeline.temporal import DateParser, parse_timestamp, record_timestamp
from ..schemas import QualityDetails, QualityReport

Clock = Callable[[], pd.Timestamp]
TimeLike = Union[datetime, pd.Timestamp, str]

SECONDS_PER_DAY = 24 * 60 * 60


def utc_now() -> pd.Timestamp:
    return pd.Timestamp.now(tz="UTC")


def _as_utc(value: TimeLike) -> pd.Timestamp:
    ts = pd.Timestamp(value)
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def _round2(value: float) -> float:
    """Round half up to two decimals."""
    return math.floor(value * 100 + 0.5) / 100


class DataQualityScorer:
    """Score completeness, consistency and recency of a set of records.

    Parameters
    ----------
    settings:
        Source of the factor weights, the recency horizon and the IQR
        multiplier. Defaults to :func:`get_settings`.
    clock:
        Callable returning the current UTC time. Defaults to the system clock.
    date_parser:
        Converts a record's ``date``/``created_at`` value to a timestamp.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        clock: Clock | None = None,
        date_parser: DateParser = parse_timestamp,
    ) -> None:
        self.settings = settings or get_settings()
        self.clock = clock or utc_now
        self.date_parser = date_parser

    def completeness(self, data: Sequence[Dict[str, Any]], required_fields: Sequence[str]) -> int:
        """Number of records whose required fields are all present and non-empty."""
        return sum(
            1 for record in data
            if all(not is_missing(record.get(f)) and record.get(f) != "" for f in required_fields)
        )

    def consistency(self, data: Sequence[Dict[str, Any]], required_fields: Sequence[str]) -> float:
        """Mean share of non-outlier values over the numeric required fields.

        A field counts as numeric when the first record holds a number for it.
        Fields are averaged only if they have at least one value; with no
        such field the dataset is fully consistent.
        """
        numeric_fields = [f for f in required_fields if is_number(data[0].get(f))]
        ratios: List[float] = []
        for field in numeric_fields:
            values = [record.get(field) for record in data if is_number(record.get(field))]
            if not values:
                continue
            result = detect_outliers(values, multiplier=self.settings.outlier_iqr_multiplier)
            ratios.append(1.0 - len(result.outliers) / len(values))
        if not ratios:
            return 1.0
        return sum(ratios) / len(ratios)

    def days_since_latest(self, data: Sequence[Dict[str, Any]], now: pd.Timestamp) -> float:
        """Age in days of the most recent parseable record date.

        Without any parseable date the epoch stands in as the latest date.
        """
        stamps = [record_timestamp(record, self.date_parser) for record in data]
        stamps = [ts for ts in stamps if ts is not None]
        latest = max(stamps) if stamps else pd.Timestamp(0, tz="UTC")
        return (now - latest).total_seconds() / SECONDS_PER_DAY

    def score(
        self,
        data: Sequence[Dict[str, Any]],
        required_fields: Sequence[str],
        now: Optional[TimeLike] = None,
    ) -> QualityReport:
        """Compute the weighted quality score of ``data``.

        Returns
        -------
        QualityReport
            ``score`` and the completeness, consistency and recency factors,
            each rounded to two decimals, plus record counts and the age in
            whole days of the latest record. An empty dataset scores 0.
        """
        if not data:
            return QualityReport()

        current = _as_utc(now) if now is not None else _as_utc(self.clock())
        complete = self.completeness(data, required_fields)
        completeness = complete / len(data)
        consistency = self.consistency(data, required_fields)
        age = self.days_since_latest(data, current)
        recency = min(1.0, max(0.0, 1.0 - age / self.settings.recency_horizon_days))

        s = self.settings
        total = (
            completeness * s.completeness_weight
            + consistency * s.consistency_weight
            + recency * s.recency_weight
        )
        return QualityReport(
            score=_round2(total),
            details=QualityDetails(
                completeness=_round2(completeness),
                consistency=_round2(consistency),
                recency=_round2(recency),
                total_records=len(data),
                complete_records=complete,
                latest_data_age=math.floor(age),
            ),
        )


def calculate_data_quality(
    data: Sequence[Dict[str, Any]],
    required_fields: Sequence[str],
    now: Optional[TimeLike] = None,
) -> QualityReport:
    """Score a dataset with the default settings; see :class:`DataQualityScorer`."""
    return DataQualityScorer().score(data, required_fields, now=now)

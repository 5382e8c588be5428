"""Anomaly detection for campaign metrics.

The :class:`MetricAnomalyDetector` flags observations that deviate strongly
from the window of observations preceding them and describes each one in a
short sentence for the dashboard's anomaly panel. Deviation is measured as a
z-score against the trailing-window mean and population standard deviation
produced by :func:`calculate_statistical_features`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..config import Settings, get_settings
from ..data_pipeline.records import is_number
from ..data_pipeline.temporal import DateParser, parse_timestamp, record_timestamp
from ..data_pipeline.windowing import calculate_statistical_features
from ..exceptions import InvalidWindowError
from ..schemas import AnomalyPoint, AnomalySummary


class MetricAnomalyDetector:
    """Detect unusual spikes and drops in metric time series.

    Parameters
    ----------
    metrics:
        Record fields to inspect, e.g. ``["impressions", "clicks"]``.
    window_size:
        Length of the trailing window. Defaults to ``settings.feature_window``.
    z_threshold:
        Absolute z-score above which a point is anomalous. Defaults to
        ``settings.anomaly_z_threshold``.
    """

    def __init__(
        self,
        metrics: Sequence[str],
        window_size: int | None = None,
        z_threshold: float | None = None,
        settings: Settings | None = None,
        date_parser: DateParser = parse_timestamp,
    ) -> None:
        settings = settings or get_settings()
        self.metrics = list(metrics)
        self.window_size = settings.feature_window if window_size is None else window_size
        self.z_threshold = settings.anomaly_z_threshold if z_threshold is None else z_threshold
        if self.window_size < 1:
            raise InvalidWindowError(f"window_size must be at least 1, got {self.window_size}")
        self.date_parser = date_parser

    def _order(self, records: Sequence[Dict[str, Any]]) -> List[Tuple[Optional[str], Dict[str, Any]]]:
        """Pair records with their date label, dated records first in time order."""
        dated = []
        undated = []
        for record in records:
            ts = record_timestamp(record, self.date_parser)
            if ts is None:
                undated.append((None, record))
            else:
                dated.append((ts, record))
        dated.sort(key=lambda pair: pair[0])
        return [(ts.strftime("%Y-%m-%d"), record) for ts, record in dated] + undated

    def compute_anomalies(self, records: Sequence[Dict[str, Any]]) -> AnomalySummary:
        """Find anomalous points of every configured metric.

        Missing values are skipped, so each metric's series consists of its
        present values in date order. Windows with zero spread cannot yield a
        z-score and never flag a point.

        Returns
        -------
        AnomalySummary
            ``has_anomalies``, one narrative line per anomalous point in
            ``details`` and the points themselves, grouped by metric in the
            configured order and chronological within a metric.
        """
        ordered = self._order(records)
        points: List[AnomalyPoint] = []
        details: List[str] = []
        for metric in self.metrics:
            observed = [(label, record[metric]) for label, record in ordered if is_number(record.get(metric))]
            features = calculate_statistical_features([value for _, value in observed], self.window_size)
            for feature in features:
                if feature.std_dev == 0:
                    continue
                z = (feature.value - feature.mean) / feature.std_dev
                if abs(z) <= self.z_threshold:
                    continue
                label = observed[feature.index][0]
                point = AnomalyPoint(
                    metric=metric,
                    date=label,
                    value=feature.value,
                    z_score=z,
                    direction="high" if z > 0 else "low",
                )
                points.append(point)
                details.append(self._narrate(point, feature.index))
        return AnomalySummary(has_anomalies=bool(points), details=details, points=points)

    @staticmethod
    def _narrate(point: AnomalyPoint, position: int) -> str:
        kind = "spike" if point.direction == "high" else "drop"
        when = f"on {point.date}" if point.date else f"at position {position}"
        return f"Unusual {kind} in {point.metric.replace('_', ' ')} detected {when} (z={point.z_score:.1f})"

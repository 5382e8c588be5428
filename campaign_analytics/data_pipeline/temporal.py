"""Time-bucketed grouping and aggregation of metric records.

Records are dictionaries carrying a ``date`` (or, failing that, a
``created_at``) field. Timestamps are parsed with pandas and handled in UTC
throughout, so bucket keys do not depend on the local timezone.

Weeks start on Sunday: a record is assigned to the Sunday on or before its
date. This is deliberately not the ISO-8601 Monday-based week, because the
dashboard's weekly charts and stored reports use Sunday keys.
"""

from __future__ import annotations

import logging
import numbers
from typing import Any, Callable, Dict, List, Literal, Optional, Sequence

import pandas as pd

from ..exceptions import ReservedFieldError, UnknownPeriodError
from ..schemas import AggregatedBucket, PeriodChange
from .metrics import calculate_percentage_change
from .records import is_missing, to_python

logger = logging.getLogger(__name__)

Period = Literal["day", "week", "month"]
Record = Dict[str, Any]
DateParser = Callable[[Any], Optional[pd.Timestamp]]

PERIODS = ("day", "week", "month")
BUCKET_FIELDS = ("period", "count")


def parse_timestamp(value: Any) -> Optional[pd.Timestamp]:
    """Parse a date-like value into a UTC timestamp.

    Strings and ``datetime``/``date`` objects are parsed by pandas; naive
    values are taken to be UTC. Numbers are epoch milliseconds. Returns None
    for missing, empty or unparseable values.
    """
    if is_missing(value) or value == "" or isinstance(value, bool):
        return None
    try:
        if isinstance(value, numbers.Real):
            ts = pd.to_datetime(value, unit="ms", utc=True)
        else:
            ts = pd.to_datetime(value, utc=True)
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(ts):
        return None
    return ts


def record_timestamp(record: Record, date_parser: DateParser = parse_timestamp) -> Optional[pd.Timestamp]:
    """Timestamp of a record, read from ``date`` and falling back to ``created_at``."""
    value = record.get("date")
    if is_missing(value) or value == "":
        value = record.get("created_at")
    return date_parser(value)


def period_key(ts: pd.Timestamp, period: Period) -> str:
    """Bucket key of a timestamp for the given period."""
    if period == "day":
        return ts.strftime("%Y-%m-%d")
    if period == "week":
        # weekday() is 0 for Monday; step back to the Sunday on or before ts
        week_start = ts - pd.Timedelta(days=(ts.weekday() + 1) % 7)
        return week_start.strftime("%Y-%m-%d")
    if period == "month":
        return f"{ts.year:04d}-{ts.month:02d}"
    raise UnknownPeriodError(f"Unknown period {period!r}; expected one of {', '.join(PERIODS)}")


def group_by_time_period(
    records: Sequence[Record],
    period: Period = "day",
    date_parser: DateParser = parse_timestamp,
) -> Dict[str, List[Record]]:
    """Group records into day, week or month buckets.

    Parameters
    ----------
    records:
        Records with a ``date`` or ``created_at`` field.
    period:
        ``"day"`` keys are ``YYYY-MM-DD``; ``"week"`` keys are the
        ``YYYY-MM-DD`` of the week's Sunday; ``"month"`` keys are ``YYYY-MM``.
    date_parser:
        Converts a raw field value into a timestamp or None.

    Returns
    -------
    dict
        Bucket key to the records in that bucket, in input order. The records
        themselves are the caller's objects, unchanged. Records without a
        parseable date are left out.
    """
    if period not in PERIODS:
        raise UnknownPeriodError(f"Unknown period {period!r}; expected one of {', '.join(PERIODS)}")

    grouped: Dict[str, List[Record]] = {}
    skipped = 0
    for record in records:
        ts = record_timestamp(record, date_parser)
        if ts is None:
            skipped += 1
            continue
        grouped.setdefault(period_key(ts, period), []).append(record)
    if skipped:
        logger.warning(f"Skipped {skipped} of {len(records)} records without a parseable date")
    return grouped


def aggregate_grouped_data(
    grouped: Dict[str, Sequence[Record]],
    sum_fields: Sequence[str] = (),
    avg_fields: Sequence[str] = (),
) -> List[AggregatedBucket]:
    """Reduce each bucket to a count, field sums and field averages.

    Missing values count as 0 in sums. Averages only consider present values
    and are 0 when a bucket has none. Buckets are returned sorted by key,
    which is chronological for the key formats produced by
    :func:`group_by_time_period`.

    Raises
    ------
    ReservedFieldError
        If a requested field is named ``period`` or ``count``, which the
        bucket itself uses.
    """
    clashes = [f for f in (*sum_fields, *avg_fields) if f in BUCKET_FIELDS]
    if clashes:
        raise ReservedFieldError(f"Cannot aggregate reserved bucket field(s): {', '.join(clashes)}")

    aggregated: List[AggregatedBucket] = []
    for period, items in grouped.items():
        totals: Dict[str, Any] = {}
        for field in sum_fields:
            totals[field] = to_python(sum(
                0 if is_missing(item.get(field)) else item.get(field)
                for item in items
            ))
        for field in avg_fields:
            values = [item.get(field) for item in items if not is_missing(item.get(field))]
            totals[field] = to_python(sum(values) / len(values)) if values else 0
        aggregated.append(AggregatedBucket(period=period, count=len(items), **totals))
    return sorted(aggregated, key=lambda bucket: bucket.period)


def calculate_period_changes(buckets: Sequence[AggregatedBucket], field: str) -> List[PeriodChange]:
    """Percentage change of ``field`` between consecutive buckets.

    Buckets are expected in chronological order, as returned by
    :func:`aggregate_grouped_data`. A bucket lacking the field counts as 0.
    """
    changes: List[PeriodChange] = []
    for previous, current in zip(buckets, buckets[1:]):
        before = float((previous.model_extra or {}).get(field) or 0)
        after = float((current.model_extra or {}).get(field) or 0)
        changes.append(PeriodChange(
            period=current.period,
            previous_period=previous.period,
            field=field,
            previous=before,
            current=after,
            change=calculate_percentage_change(before, after),
        ))
    return changes

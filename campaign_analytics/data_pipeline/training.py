"""Assembly of normalised feature/target matrices for model training.

Records missing the target or any feature are dropped rather than imputed.
The number of surviving records is reported in ``metadata.count`` so callers
can notice an underpopulated training set.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence

import numpy as np

from ..schemas import FieldNormalization, NormalizationParams, TrainingDataset, TrainingMetadata
from .normalization import normalize_data
from .records import is_missing

logger = logging.getLogger(__name__)


def prepare_training_data(
    raw_data: Sequence[Dict[str, Any]],
    target_field: str,
    feature_fields: Sequence[str],
) -> TrainingDataset:
    """Build a min-max normalised training set from raw records.

    Parameters
    ----------
    raw_data:
        Records as fetched from storage.
    target_field:
        Field to predict.
    feature_fields:
        Fields used as features; they become the matrix columns in this order.

    Returns
    -------
    TrainingDataset
        ``features`` has one row per complete record and one column per
        feature, each column normalised independently. ``targets`` is the
        normalised target vector. ``metadata`` holds the per-column and target
        ``min``/``max`` needed for :func:`denormalize_data`. When no record is
        complete, all lists are empty and ``metadata.count`` is 0.
    """
    fields = list(feature_fields)
    complete = [
        record for record in raw_data
        if not is_missing(record.get(target_field))
        and all(not is_missing(record.get(f)) for f in fields)
    ]
    dropped = len(raw_data) - len(complete)
    if dropped:
        logger.debug(f"Dropped {dropped} of {len(raw_data)} records missing {target_field!r} or a feature")

    if not complete:
        return TrainingDataset(metadata=TrainingMetadata(count=0))

    matrix = np.array([[record[f] for f in fields] for record in complete], dtype=float)
    matrix = matrix.reshape(len(complete), len(fields))
    columns = [normalize_data(matrix[:, col]) for col in range(len(fields))]
    target = normalize_data([record[target_field] for record in complete])

    if columns:
        features: List[List[float]] = np.column_stack([c.normalized for c in columns]).tolist()
    else:
        features = [[] for _ in complete]

    return TrainingDataset(
        features=features,
        targets=target.normalized,
        metadata=TrainingMetadata(
            count=len(complete),
            feature_fields=fields,
            target_field=target_field,
            feature_normalization=[
                FieldNormalization(field=name, min=c.min, max=c.max)
                for name, c in zip(fields, columns)
            ],
            target_normalization=NormalizationParams(min=target.min, max=target.max),
        ),
    )

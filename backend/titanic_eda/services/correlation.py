# backend/titanic_eda/services/correlation.py
from __future__ import annotations

import math
from typing import List, Optional, Sequence

import numpy as np

from .dataset import ORIGIN_COLUMN, TRAIN, Dataset, is_numeric, require_dataset
from ..core.errors import DatasetShapeError
from ..schemas.analysis import CorrelationMatrix


def pearson(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Pearson r; 0.0 when there are no pairs or either side is constant."""
    if len(xs) == 0:
        return 0.0
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    dx = x - x.mean()
    dy = y - y.mean()
    denom = math.sqrt(float((dx * dx).sum()) * float((dy * dy).sum()))
    if denom == 0.0:
        return 0.0
    r = float((dx * dy).sum()) / denom
    return max(-1.0, min(1.0, r))


def _pairs(a: List, b: List):
    xs, ys = [], []
    for u, v in zip(a, b):
        if is_numeric(u) and is_numeric(v):
            xs.append(float(u))
            ys.append(float(v))
    return xs, ys


def correlate(
    dataset: Dataset,
    columns: Sequence[str],
    label_column: Optional[str] = None,
) -> CorrelationMatrix:
    """
    Pearson matrix over `columns` using pairwise-complete observations.

    Rows are restricted to the train split when the label column takes part.
    The diagonal is exactly 1 and the lower triangle mirrors the upper one.
    """
    dataset = require_dataset(dataset)
    columns = list(columns)
    for col in columns:
        if col not in dataset or col == ORIGIN_COLUMN:
            raise DatasetShapeError(f"Cannot correlate unknown column: {col}")

    origin = TRAIN if label_column and label_column in columns else None
    data = [dataset.column_values(col, origin=origin) for col in columns]

    k = len(columns)
    matrix = [[0.0] * k for _ in range(k)]
    for i in range(k):
        matrix[i][i] = 1.0
        for j in range(i + 1, k):
            xs, ys = _pairs(data[i], data[j])
            r = pearson(xs, ys)
            matrix[i][j] = r
            matrix[j][i] = r

    return CorrelationMatrix(method="pearson", columns=columns, matrix=matrix)

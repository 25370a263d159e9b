# backend/titanic_eda/services/statistics.py
"""
Descriptive statistics over a merged Dataset.

- Numeric columns: count, mean, population std, min/max and nearest-rank quartiles.
- Categorical columns: value counts (top N, first-seen tie-break).
- Label-conditioned breakdowns use train rows only, since test rows carry no label.

Summaries never contain NaN/inf: a numeric column with no valid value is omitted.
"""
from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from .dataset import (
    ORIGIN_COLUMN,
    TRAIN,
    ColumnKind,
    Dataset,
    is_absent,
    is_numeric,
    require_dataset,
)
from ..schemas.analysis import (
    CategoricalSummary,
    CategoryLabelGroup,
    ColumnSummary,
    LabelOverview,
    NumericLabelGroup,
    NumericSummary,
    ValueCount,
)


TOP_VALUES_LIMIT = 10


def as_text(value: Any) -> str:
    """Stringify a category; integral floats lose their trailing '.0' (3.0 -> '3')."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def label_sign(value: Any) -> Optional[int]:
    """1 for a positive label, 0 for a negative one, None for anything else."""
    if not is_numeric(value):
        return None
    if value == 1:
        return 1
    if value == 0:
        return 0
    return None


def nearest_rank(sorted_values: Sequence[float], p: float) -> float:
    n = len(sorted_values)
    idx = min(int(math.floor(p * n)), n - 1)
    return float(sorted_values[idx])


# ---------------------------------------------------------
# Numeric path
# ---------------------------------------------------------
def numeric_summary(values: Iterable[Any], total: Optional[int] = None) -> Optional[NumericSummary]:
    """Summarize the valid numbers in `values`; None when there are none."""
    values = list(values)
    valid = [float(v) for v in values if is_numeric(v)]
    if not valid:
        return None
    total = len(values) if total is None else total

    arr = np.asarray(valid, dtype=float)
    ordered = np.sort(arr)
    lo, hi = float(ordered[0]), float(ordered[-1])
    # Float rounding can push the mean of identical values a hair outside [min, max].
    mean = min(max(float(arr.mean()), lo), hi)

    return NumericSummary(
        count=len(valid),
        missing_count=total - len(valid),
        mean=mean,
        median=nearest_rank(ordered, 0.5),
        std=float(arr.std()),
        min=lo,
        max=hi,
        q1=nearest_rank(ordered, 0.25),
        q3=nearest_rank(ordered, 0.75),
    )


def numeric_by_label(values: Sequence[Any], labels: Sequence[Any]) -> NumericLabelGroup:
    groups: Dict[int, List[float]] = {0: [], 1: []}
    for value, label in zip(values, labels):
        sign = label_sign(label)
        if sign is None or not is_numeric(value):
            continue
        groups[sign].append(float(value))

    pos = float(np.mean(groups[1])) if groups[1] else None
    neg = float(np.mean(groups[0])) if groups[0] else None
    diff = pos - neg if pos is not None and neg is not None else None
    return NumericLabelGroup(positive_mean=pos, negative_mean=neg, difference=diff)


# ---------------------------------------------------------
# Categorical path
# ---------------------------------------------------------
def value_counts(values: Iterable[Any]) -> List[Tuple[str, int]]:
    """(value, count) pairs, count descending, first-seen order among ties."""
    counts: Dict[str, int] = {}
    for value in values:
        if is_absent(value):
            continue
        key = as_text(value)
        counts[key] = counts.get(key, 0) + 1
    # sorted() is stable, so dict insertion order settles ties.
    return sorted(counts.items(), key=lambda kv: -kv[1])


def categorical_summary(
    values: Iterable[Any],
    total: Optional[int] = None,
    limit: int = TOP_VALUES_LIMIT,
) -> CategoricalSummary:
    values = list(values)
    total = len(values) if total is None else total
    counted = value_counts(values)
    present = sum(c for _, c in counted)
    return CategoricalSummary(
        count=present,
        missing_count=total - present,
        unique_count=len(counted),
        top_values=[ValueCount(value=v, count=c) for v, c in counted[:limit]],
    )


def categorical_by_label(values: Sequence[Any], labels: Sequence[Any]) -> List[CategoryLabelGroup]:
    tally: Dict[str, List[int]] = {}
    for value, label in zip(values, labels):
        sign = label_sign(label)
        if sign is None or is_absent(value):
            continue
        pos_neg = tally.setdefault(as_text(value), [0, 0])
        pos_neg[0 if sign == 1 else 1] += 1

    groups = [
        CategoryLabelGroup(
            value=value,
            positive_count=pos,
            negative_count=neg,
            positive_rate=pos / (pos + neg) * 100.0,
        )
        for value, (pos, neg) in tally.items()
    ]
    groups.sort(key=lambda g: -g.positive_rate)
    return groups


# ---------------------------------------------------------
# Whole-dataset entry points
# ---------------------------------------------------------
def summarize(
    dataset: Dataset,
    column_kinds: Dict[str, ColumnKind],
    label_column: Optional[str] = None,
    excluded: Iterable[str] = (),
    top_limit: int = TOP_VALUES_LIMIT,
) -> Dict[str, ColumnSummary]:
    """
    Summarize every non-excluded column in dataset order.

    Unconditioned stats use all rows. When `label_column` is in the dataset, each
    other column also gets a `by_label` breakdown computed over train rows only.
    """
    dataset = require_dataset(dataset)
    excluded = set(excluded or ())
    total = dataset.row_count

    grouped = bool(label_column) and label_column in dataset
    train_labels = dataset.column_values(label_column, origin=TRAIN) if grouped else []

    result: Dict[str, ColumnSummary] = {}
    for col in dataset.columns:
        if col in excluded or col == ORIGIN_COLUMN:
            continue
        kind = column_kinds.get(col, ColumnKind.CATEGORICAL)
        values = dataset.column_values(col)
        with_groups = grouped and col != label_column

        if kind is ColumnKind.NUMERIC:
            summary = numeric_summary(values, total)
            if summary is None:
                logger.warning(f"Numeric column '{col}' has no valid values; omitted from summaries")
                continue
            if with_groups:
                summary.by_label = numeric_by_label(
                    dataset.column_values(col, origin=TRAIN), train_labels
                )
        else:
            summary = categorical_summary(values, total, limit=top_limit)
            if with_groups:
                summary.by_label = categorical_by_label(
                    dataset.column_values(col, origin=TRAIN), train_labels
                )
        result[col] = summary
    return result


def label_overview(dataset: Dataset, label_column: str) -> Optional[LabelOverview]:
    """Positive/negative label split over the train rows."""
    dataset = require_dataset(dataset)
    if label_column not in dataset:
        return None
    signs = [label_sign(v) for v in dataset.column_values(label_column, origin=TRAIN)]
    positive = sum(1 for s in signs if s == 1)
    negative = sum(1 for s in signs if s == 0)
    labelled = positive + negative
    return LabelOverview(
        train_rows=dataset.train_count,
        labelled_rows=labelled,
        positive=positive,
        negative=negative,
        positive_rate=(positive / labelled * 100.0) if labelled else None,
    )

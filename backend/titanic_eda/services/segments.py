# backend/titanic_eda/services/segments.py
"""Label-positive rates of one categorical column within the groups of another."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .dataset import TRAIN, Dataset, is_absent, is_numeric, require_dataset
from .statistics import as_text, label_sign
from ..core.errors import DatasetShapeError
from ..schemas.analysis import SegmentAnalysis, SegmentRate


def _order_key(value: Any) -> Tuple[int, Any]:
    # numbers first in numeric order, then text in lexical order
    if is_numeric(value):
        return (0, float(value))
    return (1, str(value))


def _rates(tally: Dict[Tuple[str, str], List[int]]) -> List[SegmentRate]:
    return [
        SegmentRate(
            by_value=by_value,
            value=value,
            count=count,
            positive=positive,
            positive_rate=positive / count * 100.0,
        )
        for (by_value, value), (count, positive) in tally.items()
    ]


def segment_rates(dataset: Dataset, column: str, by: str, label_column: str) -> List[SegmentRate]:
    """
    For each `by` group (sorted) and each `column` value (first-seen), the share of
    labelled train rows whose label is positive.
    """
    dataset = require_dataset(dataset)
    for col in (column, by, label_column):
        if col not in dataset:
            raise DatasetShapeError(f"Unknown column: {col}")

    values = dataset.column_values(column, origin=TRAIN)
    groups = dataset.column_values(by, origin=TRAIN)
    labels = dataset.column_values(label_column, origin=TRAIN)

    rows = []
    for value, group, label in zip(values, groups, labels):
        sign = label_sign(label)
        if sign is None or is_absent(value) or is_absent(group):
            continue
        rows.append((group, as_text(value), sign))

    group_order = sorted({g for g, _, _ in rows}, key=_order_key)
    value_order = list(dict.fromkeys(v for _, v, _ in rows))

    tally: Dict[Tuple[str, str], List[int]] = {}
    for group in group_order:
        for value in value_order:
            tally[(as_text(group), value)] = [0, 0]
    for group, value, sign in rows:
        entry = tally[(as_text(group), value)]
        entry[0] += 1
        entry[1] += sign

    return _rates({key: entry for key, entry in tally.items() if entry[0] > 0})


def overall_rates(dataset: Dataset, column: str, label_column: str) -> List[SegmentRate]:
    """Same rates without the grouping column (by_value is empty)."""
    dataset = require_dataset(dataset)
    for col in (column, label_column):
        if col not in dataset:
            raise DatasetShapeError(f"Unknown column: {col}")

    tally: Dict[Tuple[str, str], List[int]] = {}
    for value, label in zip(
        dataset.column_values(column, origin=TRAIN),
        dataset.column_values(label_column, origin=TRAIN),
    ):
        sign = label_sign(label)
        if sign is None or is_absent(value):
            continue
        entry = tally.setdefault(("", as_text(value)), [0, 0])
        entry[0] += 1
        entry[1] += sign
    return _rates(tally)


def rate_ratio(rates: List[SegmentRate], numerator: str, denominator: str) -> Optional[float]:
    """Ratio of two values' positive rates (e.g. female:male); None if undefined."""
    by_value = {r.value: r.positive_rate for r in rates}
    num = by_value.get(numerator)
    den = by_value.get(denominator)
    if num is None or not den:
        return None
    return num / den


def analyze_segments(dataset: Dataset, column: str, by: str, label_column: str) -> SegmentAnalysis:
    overall = overall_rates(dataset, column, label_column)
    ratio = None
    pair = None
    if len(overall) >= 2:
        ranked = sorted(overall, key=lambda r: -r.positive_rate)
        pair = [ranked[0].value, ranked[-1].value]
        ratio = rate_ratio(overall, pair[0], pair[1])
    return SegmentAnalysis(
        column=column,
        by=by,
        overall=overall,
        segments=segment_rates(dataset, column, by, label_column),
        rate_ratio=ratio,
        ratio_pair=pair,
    )

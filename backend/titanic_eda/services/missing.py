# backend/titanic_eda/services/missing.py
from __future__ import annotations

from typing import Iterable, List

from .dataset import Dataset, is_absent, require_dataset
from ..schemas.analysis import MissingReport, MissingStat


def _reported_columns(dataset: Dataset, exclude: Iterable[str]) -> List[str]:
    excluded = set(exclude or ())
    return [col for col in dataset.columns if col not in excluded]


def missing_report(dataset: Dataset, exclude: Iterable[str] = ("PassengerId",)) -> MissingReport:
    """
    Absent-value count and percentage for each column over all rows (both origins).

    The mapping is ordered by percentage descending; equal percentages keep column order.
    Note the label column is reported missing for every test row.
    """
    dataset = require_dataset(dataset)
    total = dataset.row_count

    entries = []
    for position, col in enumerate(_reported_columns(dataset, exclude)):
        count = sum(1 for v in dataset.column_values(col) if is_absent(v))
        pct = (count / total * 100.0) if total else 0.0
        entries.append((position, col, MissingStat(count=count, percentage=pct)))

    entries.sort(key=lambda e: (-e[2].percentage, e[0]))
    return {col: stat for _, col, stat in entries}


def overall_missing_pct(dataset: Dataset, exclude: Iterable[str] = ("PassengerId",)) -> float:
    """Share of absent cells over the reported grid, in percent."""
    dataset = require_dataset(dataset)
    columns = _reported_columns(dataset, exclude)
    cells = dataset.row_count * len(columns)
    if cells == 0:
        return 0.0
    absent = sum(
        1 for col in columns for v in dataset.column_values(col) if is_absent(v)
    )
    return absent / cells * 100.0

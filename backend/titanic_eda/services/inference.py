# backend/titanic_eda/services/inference.py
from __future__ import annotations

from typing import Dict, List

from loguru import logger

from .dataset import ORIGIN_COLUMN, ColumnKind, Dataset, is_absent, is_numeric, require_dataset


TYPE_SAMPLE_ROWS = 100


def _classify(values) -> ColumnKind:
    seen_numeric = False
    for value in values:
        if is_absent(value):
            continue
        if not is_numeric(value):
            return ColumnKind.CATEGORICAL
        seen_numeric = True
    # An all-absent sample makes no numeric claim.
    return ColumnKind.NUMERIC if seen_numeric else ColumnKind.CATEGORICAL


def infer_types(dataset: Dataset, sample_size: int = TYPE_SAMPLE_ROWS) -> Dict[str, ColumnKind]:
    """Classify every column from the first `sample_size` rows, in dataset order."""
    dataset = require_dataset(dataset)
    sample = dataset.sample(sample_size)

    kinds: Dict[str, ColumnKind] = {}
    for col in dataset.columns:
        if col == ORIGIN_COLUMN:
            kinds[col] = ColumnKind.CATEGORICAL
            continue
        kinds[col] = _classify(sample[col].tolist())
        logger.debug(f"Column '{col}' inferred as {kinds[col].value}")
    return kinds


def numeric_columns(kinds: Dict[str, ColumnKind]) -> List[str]:
    return [col for col, kind in kinds.items() if kind is ColumnKind.NUMERIC]


def categorical_columns(kinds: Dict[str, ColumnKind]) -> List[str]:
    return [col for col, kind in kinds.items() if kind is ColumnKind.CATEGORICAL]

# backend/titanic_eda/services/dataset.py
"""
Row/column model and the train/test merge.

A `Dataset` is an immutable wrapper around an object-dtype DataFrame:
- columns are the first-seen union of both batches, with `origin` appended last
- rows keep append order (all train rows, then all test rows)
- every absent cell (None, NaN, empty text) is stored as None
"""
from __future__ import annotations

import math
import numbers
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd
from loguru import logger

from ..core.errors import DatasetShapeError, EmptyInputError


ORIGIN_COLUMN = "origin"
TRAIN = "train"
TEST = "test"


class ColumnKind(str, Enum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


def _to_py(obj: Any) -> Any:
    """Convert numpy/pandas scalars to plain Python types for JSON safety."""
    if isinstance(obj, (np.generic,)):
        return obj.item()
    return obj


def is_absent(value: Any) -> bool:
    """None, the empty string and non-finite floats count as absent; other text is a value."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (float, np.floating)):
        return not math.isfinite(value)
    return value is pd.NA or value is pd.NaT


def is_numeric(value: Any) -> bool:
    if is_absent(value) or isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, numbers.Real)


def _normalize(value: Any) -> Any:
    return None if is_absent(value) else _to_py(value)


class Dataset:
    def __init__(self, frame: pd.DataFrame, train_count: int, test_count: int):
        if ORIGIN_COLUMN not in frame.columns:
            raise DatasetShapeError(f"Dataset frame has no '{ORIGIN_COLUMN}' column")
        if len(frame) != train_count + test_count:
            raise DatasetShapeError("Row count does not match the train/test split")
        self._frame = frame
        self.train_count = train_count
        self.test_count = test_count

    @property
    def columns(self) -> List[str]:
        return list(self._frame.columns)

    @property
    def row_count(self) -> int:
        return len(self._frame)

    @property
    def frame(self) -> pd.DataFrame:
        # Callers get a copy so the dataset itself is never mutated.
        return self._frame.copy()

    def __len__(self) -> int:
        return self.row_count

    def __contains__(self, column: str) -> bool:
        return column in self._frame.columns

    def records(self) -> List[Dict[str, Any]]:
        return self._frame.to_dict(orient="records")

    def head(self, n: int) -> List[Dict[str, Any]]:
        return self._frame.head(max(0, int(n))).to_dict(orient="records")

    def origins(self) -> List[str]:
        return self._frame[ORIGIN_COLUMN].tolist()

    def column_values(self, column: str, origin: Optional[str] = None) -> List[Any]:
        """Raw values of `column` in row order, optionally restricted to one origin."""
        if column not in self._frame.columns:
            raise DatasetShapeError(f"Unknown column: {column}")
        series = self._frame[column]
        if origin is not None:
            series = series[self._frame[ORIGIN_COLUMN] == origin]
        return series.tolist()

    def sample(self, n: int) -> pd.DataFrame:
        return self._frame.head(max(0, int(n)))

    def __repr__(self) -> str:
        return (
            f"Dataset(rows={self.row_count}, cols={len(self.columns)}, "
            f"train={self.train_count}, test={self.test_count})"
        )


def require_dataset(obj: Any) -> Dataset:
    if not isinstance(obj, Dataset):
        raise DatasetShapeError(f"Expected a Dataset, got {type(obj).__name__}")
    return obj


def _keyed(record: Any) -> Dict[str, Any]:
    if not isinstance(record, Mapping):
        raise DatasetShapeError(
            f"Records must be mappings of column name to value, got {type(record).__name__}"
        )
    return {str(key): value for key, value in record.items()}


def _column_union(batches: Iterable[Sequence[Dict[str, Any]]]) -> List[str]:
    seen: Dict[str, None] = {}
    for batch in batches:
        for record in batch:
            for key in record:
                if key != ORIGIN_COLUMN:
                    seen.setdefault(key, None)
    return list(seen)


def merge(
    train_records: Optional[Sequence[Mapping[str, Any]]],
    test_records: Optional[Sequence[Mapping[str, Any]]],
) -> Dataset:
    """Stamp each batch with its origin and stack them into one Dataset."""
    if not train_records:
        raise EmptyInputError("Train batch is missing or empty")
    if not test_records:
        raise EmptyInputError("Test batch is missing or empty")

    # column names are text, whatever key type the caller used
    train_keyed = [_keyed(r) for r in train_records]
    test_keyed = [_keyed(r) for r in test_records]
    columns = _column_union([train_keyed, test_keyed])
    all_columns = columns + [ORIGIN_COLUMN]

    rows: List[List[Any]] = []
    for origin, batch in ((TRAIN, train_keyed), (TEST, test_keyed)):
        for record in batch:
            row = [_normalize(record.get(col)) for col in columns]
            row.append(origin)
            rows.append(row)

    frame = pd.DataFrame(rows, columns=all_columns, dtype=object)
    dataset = Dataset(frame, train_count=len(train_records), test_count=len(test_records))
    logger.info(
        f"Merged {dataset.train_count} train + {dataset.test_count} test rows "
        f"into {dataset.row_count} x {len(all_columns)}"
    )
    return dataset

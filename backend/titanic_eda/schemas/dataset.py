# backend/titanic_eda/schemas/dataset.py
from __future__ import annotations

from typing import Any, Dict, List
from pydantic import BaseModel


class ColumnRole(BaseModel):
    name: str
    role: str          # "target" | "feature" | "excluded" | "other"
    kind: str          # "numeric" | "categorical"


class DatasetOverview(BaseModel):
    rows: int
    cols: int
    train_rows: int
    test_rows: int
    train_pct: float
    test_pct: float
    label_column: str
    label_available: int
    label_missing: int
    feature_count: int
    excluded_count: int
    columns: List[ColumnRole]


class DatasetOverviewResponse(DatasetOverview):
    ok: bool = True


class DatasetPreviewResponse(BaseModel):
    ok: bool = True
    rows: int
    cols: int
    columns: List[str]
    kinds: Dict[str, str]
    data: List[Dict[str, Any]]

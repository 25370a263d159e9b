# backend/titanic_eda/schemas/analysis.py
from __future__ import annotations

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


# ============================================================
# MISSING VALUES
# ============================================================
class MissingStat(BaseModel):
    count: int = Field(ge=0)
    percentage: float = Field(ge=0.0, le=100.0)


# column -> stat, ordered by percentage descending
MissingReport = Dict[str, MissingStat]


# ============================================================
# LABEL-CONDITIONED GROUPING
# ============================================================
class NumericLabelGroup(BaseModel):
    positive_mean: Optional[float] = None
    negative_mean: Optional[float] = None
    difference: Optional[float] = None


class CategoryLabelGroup(BaseModel):
    value: str
    positive_count: int
    negative_count: int
    positive_rate: float  # percent


class LabelOverview(BaseModel):
    train_rows: int
    labelled_rows: int
    positive: int
    negative: int
    positive_rate: Optional[float] = None  # percent of labelled rows


# ============================================================
# PER-COLUMN SUMMARIES
# ============================================================
class NumericSummary(BaseModel):
    kind: Literal["numeric"] = "numeric"
    count: int
    missing_count: int
    mean: float
    median: float
    std: float
    min: float
    max: float
    q1: float
    q3: float
    by_label: Optional[NumericLabelGroup] = None


class ValueCount(BaseModel):
    value: str
    count: int


class CategoricalSummary(BaseModel):
    kind: Literal["categorical"] = "categorical"
    count: int
    missing_count: int
    unique_count: int
    top_values: List[ValueCount]
    by_label: Optional[List[CategoryLabelGroup]] = None


ColumnSummary = Union[NumericSummary, CategoricalSummary]


# ============================================================
# CORRELATION / BINNING / SEGMENTS
# ============================================================
class CorrelationMatrix(BaseModel):
    method: str = "pearson"
    columns: List[str]
    matrix: List[List[float]]

    def value(self, a: str, b: str) -> float:
        return self.matrix[self.columns.index(a)][self.columns.index(b)]


class HistogramBin(BaseModel):
    lower: float
    upper: float
    count: int
    closed_upper: bool = False  # True only for the last bin
    positive_rate: Optional[float] = None


class Histogram(BaseModel):
    column: str
    method: Literal["equal_width", "quantile", "fixed"]
    bins: List[HistogramBin]


class SegmentRate(BaseModel):
    by_value: str
    value: str
    count: int
    positive: int
    positive_rate: float  # percent


class SegmentAnalysis(BaseModel):
    column: str
    by: str
    overall: List[SegmentRate]
    segments: List[SegmentRate]
    rate_ratio: Optional[float] = None
    ratio_pair: Optional[List[str]] = None


# ============================================================
# REPORT BUNDLE
# ============================================================
class ReportMetadata(BaseModel):
    generated_at: str
    total_rows: int
    train_rows: int
    test_rows: int
    label_column: str


class AnalysisReport(BaseModel):
    metadata: ReportMetadata
    column_kinds: Dict[str, str]
    missing: Dict[str, MissingStat]
    missing_overall_pct: float
    summaries: Dict[str, ColumnSummary]
    label_overview: Optional[LabelOverview] = None
    correlation: Optional[CorrelationMatrix] = None
    histograms: List[Histogram] = []
    segments: Optional[SegmentAnalysis] = None

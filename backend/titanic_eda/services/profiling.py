# backend/titanic_eda/services/profiling.py
"""
Report assembly for the Titanic EDA backend.

- Builds the dataset overview and row preview shown right after a load.
- Runs every analysis (missingness, summaries, correlation, histograms,
  segments) over the current Dataset and bundles the results.
- Pure: the same Dataset, config and timestamp always give the same report.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from loguru import logger

from .binning import fixed_bins, histogram, quantile_bins, sturges_bin_count
from .correlation import correlate
from .dataset import TRAIN, ColumnKind, Dataset, is_numeric, require_dataset
from .inference import infer_types
from .missing import missing_report, overall_missing_pct
from .segments import analyze_segments
from .statistics import label_overview, summarize
from ..core.config import AnalysisConfig
from ..schemas.analysis import AnalysisReport, Histogram, ReportMetadata


def _role(col: str, config: AnalysisConfig) -> str:
    if col == config.label_column:
        return "target"
    if col in config.feature_columns:
        return "feature"
    if col in config.excluded_columns:
        return "excluded"
    return "other"


def build_overview(
    dataset: Dataset,
    config: AnalysisConfig,
    kinds: Optional[Dict[str, ColumnKind]] = None,
) -> Dict[str, Any]:
    """Shape, train/test split, label availability and column roles."""
    dataset = require_dataset(dataset)
    kinds = kinds or infer_types(dataset, config.type_sample_size)
    rows = dataset.row_count

    label_available = 0
    if config.label_column in dataset:
        label_available = sum(1 for v in dataset.column_values(config.label_column) if is_numeric(v))

    return {
        "rows": rows,
        "cols": len(dataset.columns),
        "train_rows": dataset.train_count,
        "test_rows": dataset.test_count,
        "train_pct": round(dataset.train_count / rows * 100.0, 3),
        "test_pct": round(dataset.test_count / rows * 100.0, 3),
        "label_column": config.label_column,
        "label_available": label_available,
        "label_missing": rows - label_available,
        "feature_count": len(config.feature_columns),
        "excluded_count": len(config.excluded_columns),
        "columns": [
            {"name": col, "role": _role(col, config), "kind": kinds[col].value}
            for col in dataset.columns
        ],
    }


def build_preview(dataset: Dataset, n: int = 10) -> Dict[str, Any]:
    """Return preview JSON: first N rows (records) in append order, plus column order."""
    dataset = require_dataset(dataset)
    n = max(1, int(n))
    return {
        "rows": dataset.row_count,
        "cols": len(dataset.columns),
        "columns": dataset.columns,
        "data": dataset.head(n),
    }


def _histograms(dataset: Dataset, kinds: Dict[str, ColumnKind], config: AnalysisConfig) -> List[Histogram]:
    """Chart-ready bins over the train rows, with label-positive rates where possible."""
    labels = None
    if config.label_column in dataset:
        labels = dataset.column_values(config.label_column, origin=TRAIN)

    def usable(col: str) -> bool:
        return col in dataset and kinds.get(col) is ColumnKind.NUMERIC

    out: List[Histogram] = []
    for col in config.histogram_columns:
        if not usable(col):
            continue
        values = dataset.column_values(col, origin=TRAIN)
        n_valid = sum(1 for v in values if is_numeric(v))
        out.append(Histogram(
            column=col,
            method="equal_width",
            bins=histogram(values, sturges_bin_count(n_valid), labels=labels),
        ))
    for col in config.quantile_columns:
        if not usable(col):
            continue
        values = dataset.column_values(col, origin=TRAIN)
        out.append(Histogram(
            column=col,
            method="quantile",
            bins=quantile_bins(values, config.quantile_bin_count, labels=labels),
        ))
    if usable(config.age_column) and config.age_bin_edges:
        values = dataset.column_values(config.age_column, origin=TRAIN)
        out.append(Histogram(
            column=config.age_column,
            method="fixed",
            bins=fixed_bins(values, config.age_bin_edges, labels=labels),
        ))
    return out


def build_report(
    dataset: Dataset,
    config: AnalysisConfig,
    kinds: Optional[Dict[str, ColumnKind]] = None,
    now: Optional[datetime] = None,
) -> AnalysisReport:
    """Compute the full analysis bundle for one dataset snapshot."""
    dataset = require_dataset(dataset)
    kinds = kinds or infer_types(dataset, config.type_sample_size)
    now = now or datetime.now(timezone.utc)
    missing_excluded = [config.id_column] if config.id_column else []

    logger.info(f"Running analysis over {dataset!r}")

    corr_cols = [
        c for c in config.correlation_columns
        if c in dataset and kinds.get(c) is ColumnKind.NUMERIC
    ]
    correlation = None
    if len(corr_cols) >= 2:
        correlation = correlate(dataset, corr_cols, label_column=config.label_column)

    segments = None
    seg_cols = (config.segment_column, config.segment_by, config.label_column)
    if all(c in dataset for c in seg_cols):
        segments = analyze_segments(dataset, *seg_cols)

    report = AnalysisReport(
        metadata=ReportMetadata(
            generated_at=now.isoformat(),
            total_rows=dataset.row_count,
            train_rows=dataset.train_count,
            test_rows=dataset.test_count,
            label_column=config.label_column,
        ),
        column_kinds={col: kind.value for col, kind in kinds.items()},
        missing=missing_report(dataset, exclude=missing_excluded),
        missing_overall_pct=round(overall_missing_pct(dataset, exclude=missing_excluded), 3),
        summaries=summarize(
            dataset,
            kinds,
            label_column=config.label_column,
            excluded=config.excluded_columns,
            top_limit=config.top_values_limit,
        ),
        label_overview=label_overview(dataset, config.label_column),
        correlation=correlation,
        histograms=_histograms(dataset, kinds, config),
        segments=segments,
    )
    logger.info(
        f"Analysis complete: {len(report.summaries)} summaries, "
        f"{len(report.histograms)} histograms"
    )
    return report

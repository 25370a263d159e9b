# backend/titanic_eda/routers/analysis.py

from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query

from ..core.errors import DatasetShapeError, NoDatasetError
from ..schemas.analysis import (
    AnalysisReport,
    ColumnSummary,
    CorrelationMatrix,
    Histogram,
    MissingStat,
    SegmentAnalysis,
)
from ..services import session as session_service
from ..services.binning import histogram, quantile_bins, sturges_bin_count
from ..services.correlation import correlate
from ..services.dataset import TRAIN, ColumnKind, is_numeric
from ..services.inference import numeric_columns
from ..services.missing import missing_report
from ..services.segments import analyze_segments
from ..services.statistics import summarize

router = APIRouter(tags=["analysis"])


# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------
def _current():
    try:
        return session_service.get_dataset(), session_service.get_kinds()
    except NoDatasetError as e:
        raise HTTPException(status_code=409, detail=str(e))


# -------------------------------------------------------------------
# FULL RUN
# -------------------------------------------------------------------
@router.post("/run", response_model=AnalysisReport)
def run() -> AnalysisReport:
    """Recompute every analysis for the current dataset and keep it for export."""
    _current()
    return session_service.run_analysis()


@router.get("/report", response_model=AnalysisReport)
def last_report() -> AnalysisReport:
    report = session_service.get_report()
    if report is None:
        raise HTTPException(404, "No report yet. Run the analysis first.")
    return report


# -------------------------------------------------------------------
# INDIVIDUAL ANALYSES
# -------------------------------------------------------------------
@router.get("/missing", response_model=Dict[str, MissingStat])
def missing() -> Dict[str, MissingStat]:
    dataset, _ = _current()
    config = session_service.get_config()
    return missing_report(dataset, exclude=[config.id_column])


@router.get("/summaries", response_model=Dict[str, ColumnSummary])
def summaries() -> Dict[str, ColumnSummary]:
    dataset, kinds = _current()
    config = session_service.get_config()
    return summarize(
        dataset,
        kinds,
        label_column=config.label_column,
        excluded=config.excluded_columns,
        top_limit=config.top_values_limit,
    )


@router.get("/correlation", response_model=CorrelationMatrix)
def correlation(columns: Optional[List[str]] = Query(None)) -> CorrelationMatrix:
    """
    Pearson matrix; defaults to every numeric non-excluded column.
    """
    dataset, kinds = _current()
    config = session_service.get_config()
    if not columns:
        columns = [c for c in numeric_columns(kinds) if c not in config.excluded_columns]
    try:
        return correlate(dataset, columns, label_column=config.label_column)
    except DatasetShapeError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/histogram/{column}", response_model=Histogram)
def column_histogram(
    column: str,
    bins: Optional[int] = Query(None, ge=1, le=200),
    method: str = Query("equal_width", pattern="^(equal_width|quantile)$"),
) -> Histogram:
    """
    Bins over the train rows, each with the label-positive rate.
    `bins` defaults to Sturges' rule for equal width and 10 for quantile.
    """
    dataset, kinds = _current()
    config = session_service.get_config()
    if column not in dataset:
        raise HTTPException(404, f"Column '{column}' not found.")
    if kinds.get(column) is not ColumnKind.NUMERIC:
        raise HTTPException(400, f"Column '{column}' is not numeric.")

    values = dataset.column_values(column, origin=TRAIN)
    labels = None
    if config.label_column in dataset:
        labels = dataset.column_values(config.label_column, origin=TRAIN)

    if method == "quantile":
        result = quantile_bins(values, bins or config.quantile_bin_count, labels=labels)
    else:
        n_valid = sum(1 for v in values if is_numeric(v))
        result = histogram(values, bins or sturges_bin_count(n_valid), labels=labels)
    return Histogram(column=column, method=method, bins=result)


@router.get("/segments", response_model=SegmentAnalysis)
def segments(column: Optional[str] = None, by: Optional[str] = None) -> SegmentAnalysis:
    dataset, _ = _current()
    config = session_service.get_config()
    try:
        return analyze_segments(
            dataset,
            column or config.segment_column,
            by or config.segment_by,
            config.label_column,
        )
    except DatasetShapeError as e:
        raise HTTPException(status_code=400, detail=str(e))

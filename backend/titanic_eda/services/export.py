# backend/titanic_eda/services/export.py

"""
Export Serializers
------------------
Turns the current Dataset and the last AnalysisReport into download payloads.

Provides:
    dataset_to_csv(dataset)   -> CSV text, rows in append order, origin column last
    report_to_json(report)    -> pretty-printed JSON text

Any failure surfaces as ExportFailure; nothing is written to disk here.
"""

import json
import math
from typing import Any

from loguru import logger

from .dataset import Dataset, require_dataset
from ..core.errors import ExportFailure
from ..schemas.analysis import AnalysisReport

CSV_FILENAME = "titanic_merged_dataset.csv"
JSON_FILENAME = "titanic_statistics.json"


def _json_safe(obj: Any) -> Any:
    """
    Recursively replace non-finite floats (NaN / inf / -inf) with None
    so that the JSON output stays standards-compliant.
    """
    if isinstance(obj, float):
        if math.isfinite(obj):
            return obj
        return None
    if isinstance(obj, dict):
        return {k: _json_safe(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_json_safe(v) for v in obj]
    return obj


# ---------------------------------------------------------
# Merged dataset -> CSV
# ---------------------------------------------------------
def dataset_to_csv(dataset: Dataset) -> str:
    """
    Serialize the merged dataset; absent cells become empty fields.
    Returns:
        str csv_text
    """
    dataset = require_dataset(dataset)
    try:
        text = dataset.frame.to_csv(index=False, lineterminator="\r\n")
    except Exception as e:
        logger.error(f"CSV export failed: {e}")
        raise ExportFailure(f"Error exporting CSV: {e}") from e
    logger.info(f"Exported {dataset.row_count} rows as CSV")
    return text


# ---------------------------------------------------------
# Report bundle -> JSON
# ---------------------------------------------------------
def report_to_json(report: AnalysisReport) -> str:
    """
    Serialize the full analysis bundle, metadata included.
    Returns:
        str json_text
    """
    if not isinstance(report, AnalysisReport):
        raise ExportFailure("No statistics to export. Run the analysis first.")
    try:
        payload = _json_safe(report.model_dump(mode="json"))
        text = json.dumps(payload, indent=2, allow_nan=False)
    except (TypeError, ValueError) as e:
        logger.error(f"JSON export failed: {e}")
        raise ExportFailure(f"Error exporting JSON: {e}") from e
    return text

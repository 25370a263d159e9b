# backend/titanic_eda/routers/export.py
from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from ..core.errors import ExportFailure, NoDatasetError
from ..services import session as session_service
from ..services.export import CSV_FILENAME, JSON_FILENAME, dataset_to_csv, report_to_json

router = APIRouter(tags=["export"])


def _attachment(filename: str) -> dict:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.get("/csv")
def export_csv() -> Response:
    """Merged dataset (train rows, then test rows, origin column last) as CSV."""
    try:
        text = dataset_to_csv(session_service.get_dataset())
    except NoDatasetError:
        raise HTTPException(status_code=409, detail="No data to export")
    except ExportFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    return Response(content=text, media_type="text/csv; charset=utf-8", headers=_attachment(CSV_FILENAME))


@router.get("/json")
def export_json() -> Response:
    """Last analysis report as JSON."""
    if not session_service.session.loaded:
        raise HTTPException(status_code=409, detail="No data to export")
    report = session_service.get_report()
    if report is None:
        raise HTTPException(status_code=404, detail="No statistics to export. Run the analysis first.")
    try:
        text = report_to_json(report)
    except ExportFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    return Response(content=text, media_type="application/json", headers=_attachment(JSON_FILENAME))
